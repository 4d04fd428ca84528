"""Error taxonomy for the archive job."""

from __future__ import annotations


class StockArchiverError(RuntimeError):
    pass


class PreconditionError(StockArchiverError):
    """Required configuration is missing; nothing was attempted."""


class TransportError(StockArchiverError):
    """A catalog page could not be fetched."""


class ArchiveError(StockArchiverError):
    def __init__(self, product_id: int | str, status_code: int | None, body: str) -> None:
        self.product_id = product_id
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Failed to archive product {product_id}: {body}"
        else:
            message = f"Failed to archive product {product_id} ({status_code}): {body}"
        super().__init__(message)


class NotificationError(StockArchiverError):
    pass
