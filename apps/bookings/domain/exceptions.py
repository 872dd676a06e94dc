"""
Booking Domain Exceptions

Raised by the booking transaction and the availability probe; the API
layer turns them into responses. Every error carries ``reason_kind``, the
name clients branch on.
"""


class BookingError(Exception):
    """Base class for booking failures"""
    reason_kind = 'BookingError'


class InputError(BookingError):
    """The request itself is malformed; nothing was touched"""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class InvalidDate(InputError):
    reason_kind = 'InvalidDate'


class InvalidTimeFormat(InputError):
    reason_kind = 'InvalidTimeFormat'


class ConflictError(BookingError):
    """A requested slot cannot be claimed; the transaction was rolled back"""

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(self.describe())

    def describe(self) -> str:
        return f"Slot {self.slot} cannot be booked"


class SlotConflict(ConflictError):
    reason_kind = 'SlotConflict'

    def describe(self) -> str:
        return f"Slot {self.slot} is already booked"


class SlotUnderMaintenance(ConflictError):
    reason_kind = 'SlotUnderMaintenance'

    def describe(self) -> str:
        return f"Slot {self.slot} is under maintenance"


class TransactionError(BookingError):
    """Unexpected storage failure; the transaction was rolled back"""
    reason_kind = 'TransactionError'

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)
