from datetime import date, datetime
import pytz

from fieldsales.core.config import settings


def business_tz():
    return pytz.timezone(settings.TIMEZONE)


def now() -> datetime:
    """Current wall-clock time in the business timezone, tz-naive for storage."""
    return datetime.now(business_tz()).replace(tzinfo=None, microsecond=0)


def today() -> date:
    return datetime.now(business_tz()).date()
