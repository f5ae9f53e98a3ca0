class AccountingError(Exception):
    """Base class for errors raised by the accounting stores."""


class NotFoundError(AccountingError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ValidationError(AccountingError, ValueError):
    pass


class StorageUnavailableError(AccountingError):
    pass


__all__ = [
    "AccountingError",
    "NotFoundError",
    "StorageUnavailableError",
    "ValidationError",
]
