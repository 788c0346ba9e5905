"""Custom exceptions for the Trade Journal application."""


class TradeJournalError(Exception):
    """Base exception for Trade Journal."""

    pass


class NotFoundError(TradeJournalError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with id {resource_id} not found")
