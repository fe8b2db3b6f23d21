class LedgerError(Exception):
    """Base class for ledger domain errors."""


class CustomerNotFound(LedgerError):
    def __init__(self, customer_id: int):
        super().__init__(f"Customer {customer_id} does not exist")
        self.customer_id = customer_id


class BookingNotFound(LedgerError):
    def __init__(self, booking_id: int):
        super().__init__(f"Booking {booking_id} does not exist")
        self.booking_id = booking_id


class ItemNotFound(LedgerError):
    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} does not exist")
        self.item_id = item_id


class RuleViolation(LedgerError):
    """A configured price/quantity rule rejected the input."""


class AmountMismatch(LedgerError):
    def __init__(self, qty, unit_price, amount):
        super().__init__(f"Amount {amount} != {qty} x {unit_price}")
        self.qty = qty
        self.unit_price = unit_price
        self.amount = amount
