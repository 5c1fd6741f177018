from fastapi import status


class StockFlowError(Exception):
    """Base for failures that are reported to the caller as-is."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StockFlowError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(StockFlowError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(StockFlowError):
    status_code = status.HTTP_409_CONFLICT


class TransactionFailure(StockFlowError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "ConflictError",
    "NotFoundError",
    "StockFlowError",
    "TransactionFailure",
    "ValidationError",
]
