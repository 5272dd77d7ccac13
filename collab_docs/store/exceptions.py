"""Custom exceptions for record stores."""


class StoreError(Exception):
    """Base exception for persistence failures."""


class RecordNotFoundError(StoreError):
    """Raised when an update or delete targets a row that does not exist."""

    def __init__(self, model_name: str, record_id: str) -> None:
        super().__init__(f"{model_name} not found: {record_id}")
        self.model_name = model_name
        self.record_id = record_id
