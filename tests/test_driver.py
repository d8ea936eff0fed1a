from unittest.mock import patch

import pytest
from django.core.management import CommandError, call_command

from synkros.driver import CycleDriver
from synkros.exceptions import SourceUnavailableError
from synkros.notifier import DesktopNotifier, status_message
from synkros.reconciler import CycleReport


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, message):
        self.messages.append(message)


# ---------------------------------------------------------------------------
# Status message
# ---------------------------------------------------------------------------

class TestStatusMessage:
    def test_pending_actions_are_counted(self):
        assert status_message(3) == 'Pending actions: 3'

    def test_nothing_pending_reports_idle(self):
        assert status_message(0) == 'Ready, waiting for changes'


# ---------------------------------------------------------------------------
# CycleDriver
# ---------------------------------------------------------------------------

class TestCycleDriver:
    def test_each_pass_is_followed_by_one_notification(self):
        notifier = RecordingNotifier()
        reports = iter([CycleReport(attempted=3, published=1), CycleReport()])
        driver = CycleDriver(lambda: next(reports), notifier, interval=3600)

        with patch('synkros.driver.time.sleep'):
            driver.run_forever(max_cycles=2)

        assert notifier.messages == ['Pending actions: 2', 'Ready, waiting for changes']

    def test_sleeps_full_interval_between_passes(self):
        driver = CycleDriver(CycleReport, RecordingNotifier(), interval=3600)

        with patch('synkros.driver.time.sleep') as mock_sleep:
            driver.run_forever(max_cycles=3)

        sleep_args = [call.args[0] for call in mock_sleep.call_args_list]
        assert sleep_args == [3600, 3600]

    def test_failed_pass_still_notifies_and_continues(self):
        notifier = RecordingNotifier()
        outcomes = iter([RuntimeError('boom'), CycleReport(attempted=1)])

        def run_pass():
            outcome = next(outcomes)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        driver = CycleDriver(run_pass, notifier, interval=1)
        with patch('synkros.driver.time.sleep'):
            driver.run_forever(max_cycles=2)

        assert len(notifier.messages) == 2
        assert notifier.messages[1] == 'Pending actions: 1'

    def test_run_once_returns_report(self):
        report = CycleReport(products=4)
        driver = CycleDriver(lambda: report, RecordingNotifier(), interval=1)
        assert driver.run_once() is report


# ---------------------------------------------------------------------------
# DesktopNotifier
# ---------------------------------------------------------------------------

class TestDesktopNotifier:
    def test_sends_title_subtitle_and_body(self):
        with patch('synkros.notifier.notification') as mock_notification:
            DesktopNotifier().notify('Pending actions: 2')

        mock_notification.notify.assert_called_once_with(
            title='Sync status', app_name='Synchronization', message='Pending actions: 2',
        )

    def test_missing_backend_is_not_fatal(self):
        with patch('synkros.notifier.notification') as mock_notification:
            mock_notification.notify.side_effect = NotImplementedError('no usable implementation')
            DesktopNotifier().notify('Ready, waiting for changes')


# ---------------------------------------------------------------------------
# sync_catalog management command
# ---------------------------------------------------------------------------

class TestSyncCatalogCommand:
    def test_unreachable_source_is_fatal(self):
        with patch(
            'synkros.management.commands.sync_catalog.CatalogSource.check_connection',
            side_effect=SourceUnavailableError('connection refused'),
        ):
            with pytest.raises(CommandError, match='connection refused'):
                call_command('sync_catalog', '--once')

    def test_once_runs_single_pass_after_startup(self, settings, tmp_path):
        settings.ASSET_STAGING_DIR = str(tmp_path)
        leftover = tmp_path / 'P009.jpeg'
        leftover.write_bytes(b'stale')
        module = 'synkros.management.commands.sync_catalog'

        with patch(f'{module}.CatalogSource.check_connection'), \
                patch(f'{module}.call_command') as mock_migrate, \
                patch(f'{module}.build_reconciler') as mock_build, \
                patch(f'{module}.DesktopNotifier') as mock_notifier, \
                patch('synkros.driver.time.sleep') as mock_sleep:
            mock_build.return_value.run.return_value = CycleReport()
            call_command('sync_catalog', '--once')

        mock_migrate.assert_called_once()
        assert not leftover.exists()
        mock_build.return_value.run.assert_called_once_with()
        mock_notifier.return_value.notify.assert_called_once_with('Ready, waiting for changes')
        mock_sleep.assert_not_called()
