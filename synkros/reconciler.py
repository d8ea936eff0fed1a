import logging
from dataclasses import asdict, dataclass
from typing import Optional

from django.db import DatabaseError

from .exceptions import AssetUploadError
from .ingestion_client import IngestionClient
from .ledger import LedgerEntry, SyncLedger
from .source import CatalogSource
from .stager import AssetStager

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    products: int = 0
    uploaded: int = 0
    published: int = 0
    skipped: int = 0
    errors: int = 0
    attempted: int = 0

    @property
    def pending(self) -> int:
        """Publish actions attempted this pass that were not acknowledged."""
        return self.attempted - self.published

    def as_dict(self) -> dict:
        return {**asdict(self), 'pending': self.pending}


class CatalogReconciler:
    """
    Mirror the catalog source into the ingestion service, one product at a time.

    For every product listed by the source:
      1. Re-read its photo, name and price from the source.
      2. With a photo: stage it, upload it only if the product has no ledger
         record yet (otherwise reuse the stored asset id), then publish.
      3. Without a photo: publish only when name or price drifted from the
         ledger. Products never synced before are left alone.
      4. After a successful publish, record the product in the ledger.

    Failures are contained to the product they happen on.
    """

    def __init__(
        self,
        source: CatalogSource,
        ledger: SyncLedger,
        stager: AssetStager,
        client: IngestionClient,
    ):
        self._source = source
        self._ledger = ledger
        self._stager = stager
        self._client = client

    def run(self) -> CycleReport:
        report = CycleReport()
        logger.info("Starting catalog sync pass.")

        try:
            products = self._source.list_products()
        except DatabaseError as exc:
            logger.error("Failed to list products from the catalog source: %s", exc)
            return report

        for product in products:
            report.products += 1
            try:
                self._reconcile(product, report)
            except Exception as exc:
                report.errors += 1
                logger.error("Failed to sync product %s: %s", product['code'], exc)

        logger.info(
            "Sync pass complete. products=%d, uploaded=%d, published=%d, skipped=%d, errors=%d.",
            report.products, report.uploaded, report.published, report.skipped, report.errors,
        )
        return report

    def _reconcile(self, product: dict, report: CycleReport):
        code = product['code']

        try:
            detail = self._source.fetch_detail(code)
        except (DatabaseError, LookupError) as exc:
            report.errors += 1
            logger.error("Error fetching photo for %s: %s", code, exc)
            return

        product = {**product, 'name': detail.name, 'price': detail.price}

        if not detail.photo:
            logger.info("No photo found for product %s.", code)
            self._check_drift(product, report)
            return

        try:
            staged = self._stager.stage(code, detail.photo)
        except OSError as exc:
            report.errors += 1
            logger.error("Error staging photo for %s: %s", code, exc)
            return
        product['photo_size'] = staged.size

        previous = None
        if self._ledger.exists(code):
            previous = self._ledger.lookup(code)
            if previous is None:
                # Publishing without the stored asset would overwrite it with nothing.
                report.errors += 1
                logger.error("Sync record for %s could not be read – skipping.", code)
                return
            product['assets'] = list(previous.assets)
            logger.debug("Product %s already synced – reusing stored asset.", code)
        else:
            try:
                asset_id = self._client.upload_asset(staged.path)
            except AssetUploadError as exc:
                report.errors += 1
                logger.error("Error uploading asset for %s: %s", code, exc)
                return
            report.uploaded += 1
            product['assets'] = [str(asset_id)]

        self._publish(product, report, previous)

    def _check_drift(self, product: dict, report: CycleReport):
        code = product['code']
        previous = self._ledger.lookup(code)

        if previous is None:
            report.skipped += 1
            logger.debug("Product %s has no photo and no sync record – skipping.", code)
            return

        if previous.name == product['name'] and previous.price == product['price']:
            report.skipped += 1
            logger.debug("Product %s unchanged – skipping.", code)
            return

        logger.info(
            "Product %s drifted (name %r -> %r, price %s -> %s) – updating.",
            code, previous.name, product['name'], previous.price, product['price'],
        )
        updated = {
            **product,
            'assets': list(previous.assets),
            'photo_size': previous.photo_size,
        }
        self._publish(updated, report, previous)

    def _publish(self, product: dict, report: CycleReport, previous: Optional[LedgerEntry]):
        code = product['code']
        report.attempted += 1

        if not self._client.publish(product, 'update'):
            report.errors += 1
            return
        report.published += 1

        assets = product['assets']
        current = LedgerEntry(
            name=product['name'],
            price=product['price'],
            assets=list(assets),
            photo_size=product['photo_size'],
            asset_id=int(assets[0]) if assets else 0,
        )
        if current == previous:
            logger.debug("Ledger already up to date for %s.", code)
            return

        if not self._ledger.upsert(code, current.photo_size, current.asset_id, current.name, current.price):
            report.errors += 1
