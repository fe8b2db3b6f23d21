import pytest

from fieldsales.domain.enums import VisitStatus
from fieldsales.domain.exceptions import AmountMismatch, RuleViolation
from fieldsales.domain.rules import LineRules, check_amount


@pytest.mark.parametrize("raw, expected", [
    (1, VisitStatus.VISITED),
    (0, VisitStatus.UNVISITED),
    (True, VisitStatus.VISITED),
    (False, VisitStatus.UNVISITED),
    ("Visited", VisitStatus.VISITED),
    ("unvisited", VisitStatus.UNVISITED),
    (" VISITED ", VisitStatus.VISITED),
    (VisitStatus.VISITED, VisitStatus.VISITED),
])
def test_visit_status_coerce(raw, expected):
    assert VisitStatus.coerce(raw) is expected


@pytest.mark.parametrize("raw", [2, "maybe", None, 1.5])
def test_visit_status_rejects_unknown(raw):
    with pytest.raises(ValueError):
        VisitStatus.coerce(raw)


def test_check_amount():
    check_amount(3, 100.0, 300.0)
    check_amount(3, 0.1, 0.30000000000000004)
    with pytest.raises(AmountMismatch):
        check_amount(3, 100.0, 299.0)


def test_line_rules_defaults_allow_negative_price():
    rules = LineRules()
    rules.check_line(1, -1.0)
    with pytest.raises(RuleViolation):
        rules.check_line(0, 10.0)


def test_line_rules_fully_lenient():
    LineRules(require_positive_quantity=False, require_non_negative_price=False).check_line(-2, -1.0)


def test_line_rules_price_check():
    with pytest.raises(RuleViolation):
        LineRules(require_non_negative_price=True).check_price(-0.01)
    LineRules(require_non_negative_price=True).check_price(0)
