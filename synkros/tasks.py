import logging

from celery import shared_task
from django.conf import settings

from .ingestion_client import IngestionClient
from .ledger import SyncLedger
from .notifier import DesktopNotifier, status_message
from .reconciler import CatalogReconciler
from .source import CatalogSource
from .stager import AssetStager

logger = logging.getLogger(__name__)


def build_reconciler() -> CatalogReconciler:
    """Wire the reconciler to the configured source, ledger, staging dir and ingestion service."""
    return CatalogReconciler(
        source=CatalogSource(),
        ledger=SyncLedger(),
        stager=AssetStager(settings.ASSET_STAGING_DIR),
        client=IngestionClient(),
    )


@shared_task(bind=True, name='synkros.sync_catalog')
def sync_catalog_task(self):
    """
    Run a single catalog sync pass and post the status notification.

    For deployments that schedule passes with Celery beat instead of the
    blocking `sync_catalog` management command.
    """
    report = build_reconciler().run()
    DesktopNotifier().notify(status_message(report.pending))
    return report.as_dict()
