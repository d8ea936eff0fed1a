import logging
from typing import NamedTuple, Optional

from django.db import DatabaseError

from .models import SyncRecord

logger = logging.getLogger(__name__)


class LedgerEntry(NamedTuple):
    name: str
    price: float
    assets: list[str]
    photo_size: int
    asset_id: int


class SyncLedger:
    """
    Local record of what has already been mirrored to the ingestion service.

    A record exists only once a product was published successfully. Read
    errors are logged and reported as "not synced", write errors are logged
    and reported as a failed write; neither is allowed to stop a cycle.
    """

    def exists(self, code: str) -> bool:
        try:
            return SyncRecord.objects.filter(code=code).exists()
        except DatabaseError as exc:
            logger.error("Ledger check failed for %s: %s", code, exc)
            return False

    def lookup(self, code: str) -> Optional[LedgerEntry]:
        try:
            record = SyncRecord.objects.get(code=code)
        except SyncRecord.DoesNotExist:
            return None
        except DatabaseError as exc:
            logger.error("Ledger lookup failed for %s: %s", code, exc)
            return None

        assets = [str(record.asset_id)] if record.asset_id else []
        return LedgerEntry(
            name=record.name,
            price=record.price,
            assets=assets,
            photo_size=record.photo_size,
            asset_id=record.asset_id,
        )

    def upsert(self, code: str, photo_size: int, asset_id: int, name: str, price: float) -> bool:
        """Insert or replace the record for `code`; last_synced_at is refreshed on every write."""
        try:
            SyncRecord.objects.update_or_create(
                code=code,
                defaults={
                    'photo_size': photo_size,
                    'asset_id': asset_id,
                    'name': name,
                    'price': price,
                },
            )
        except DatabaseError as exc:
            logger.error("Failed to record %s as synced: %s", code, exc)
            return False

        logger.info(
            "Product %s marked as synced (photo size %d bytes, asset %d).",
            code, photo_size, asset_id,
        )
        return True
