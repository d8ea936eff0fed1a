import logging

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from synkros.driver import CycleDriver
from synkros.exceptions import SourceUnavailableError
from synkros.notifier import DesktopNotifier
from synkros.source import CatalogSource
from synkros.stager import AssetStager
from synkros.tasks import build_reconciler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Mirror the product catalog into the ingestion service on a fixed interval."

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help="Run a single sync pass and exit.",
        )

    def handle(self, *args, **options):
        logger.info("Connecting to the catalog source...")
        try:
            CatalogSource().check_connection()
        except SourceUnavailableError as exc:
            raise CommandError(str(exc)) from exc
        logger.info("Connected to the catalog source.")

        call_command('migrate', 'synkros', database='default', verbosity=0, interactive=False)
        AssetStager(settings.ASSET_STAGING_DIR).purge()

        driver = CycleDriver(
            run_pass=build_reconciler().run,
            notifier=DesktopNotifier(),
            interval=settings.SYNC_INTERVAL_SECONDS,
        )
        driver.run_forever(max_cycles=1 if options['once'] else None)
