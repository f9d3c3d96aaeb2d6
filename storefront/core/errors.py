"""Error kinds raised by the pool, the readers and the order coordinator.

Routes translate these into JSON responses; nothing here is fatal to the
process.
"""
from storefront.core.constants import MISSING_ORDER_DETAILS, USER_NOT_FOUND


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    """Incomplete order request, detected before any data-store access."""

    status_code = 400

    def __init__(self, message: str = MISSING_ORDER_DETAILS):
        super().__init__(message)


class NotFoundError(StorefrontError):
    status_code = 404

    def __init__(self, message: str = USER_NOT_FOUND):
        super().__init__(message)


class DataStoreError(StorefrontError):
    """A read or write against the store failed."""


class TransactionalError(DataStoreError):
    """A step of order placement failed; the transaction was rolled back."""


class ConnectivityError(DataStoreError):
    """The store could not be reached."""


class PoolExhaustedError(ConnectivityError):
    """No connection became free within the wait limits."""


def describe(exc: BaseException) -> str:
    # DBAPI errors wrap the driver error in .orig; its text is what the driver reported
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)
