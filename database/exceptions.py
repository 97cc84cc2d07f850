class StoreError(Exception):
    """Base class for every failure raised by the transaction store."""


class StoreUnavailable(StoreError):
    """The database cannot be opened, its schema cannot be ensured, or it is closed."""


class WriteFailed(StoreError):
    """An insert, update or delete did not complete; nothing was committed."""
