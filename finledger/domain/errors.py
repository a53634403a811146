"""Error taxonomy for ledger operations."""


class LedgerError(Exception):
    """Base class for every failure raised by the ledger engine."""


class Unauthorized(LedgerError):
    """The caller has no valid user identity."""


class NotFound(LedgerError):
    """A referenced entity does not exist or is not owned by the caller."""

    def __init__(self, entity: str, guid: str) -> None:
        super().__init__(f"{entity} not found: {guid}")
        self.entity = entity
        self.guid = guid


class InvalidInput(LedgerError):
    """A payload is malformed or violates a ledger constraint."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class StorageFailure(LedgerError):
    """The underlying persistence layer failed."""


__all__ = [
    "LedgerError",
    "Unauthorized",
    "NotFound",
    "InvalidInput",
    "StorageFailure",
]
