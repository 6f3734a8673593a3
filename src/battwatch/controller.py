# filepath: src/battwatch/controller.py
"""Host process for the battery monitor."""

from __future__ import annotations

import logging
import signal
import time
from pathlib import Path
from types import FrameType
from typing import Final

from battwatch.common.enums import SequenceOutcome, SuspendMethod, Urgency
from battwatch.constants import TEST_SUSPEND_DELAY_SECONDS
from battwatch.errors import ConfigError, NoBatteryError
from battwatch.monitor.loop import MonitorLoop
from battwatch.monitor.sequencer import try_suspend_methods
from battwatch.presentation.desktop import DesktopPresenter
from battwatch.presentation.protocols import MockPresenter, Presenter
from battwatch.settings.store import ConfigStore, create_config_store
from battwatch.settings.user import MonitorSettings
from battwatch.system.power_source import PowerSource, SysfsPowerSource
from battwatch.system.status import BatteryReading
from battwatch.system.suspend import CommandSuspendExecutor, SuspendExecutor
from battwatch.utils.formatting import describe_status

logger: Final = logging.getLogger(__name__)


class BatteryMonitor:
    """Main controller class for the battery monitor application.

    This class wires the monitoring core to its collaborators:
    - Loading settings from the config store
    - Choosing the presenter, power source and suspend executor
    - Running the monitor loop and reacting to process signals
    - Saving settings and handing them to the running loop

    All application dependencies are initialized here, making this
    the central coordination point for the application.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        store: ConfigStore | None = None,
        presenter: Presenter | None = None,
        power_source: PowerSource | None = None,
        executor: SuspendExecutor | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the battery monitor controller.

        Args:
            config_path: Config file (resolved from the environment if None)
            store: Optional custom config store
            presenter: Optional custom presenter
            power_source: Optional custom battery sensor
            executor: Optional custom suspend executor
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        # Load configuration; bad values and a missing file yield defaults
        self.store = store or create_config_store(config_path)
        self.settings: MonitorSettings = self.store.load()
        # What the store last held, so exit does not rewrite an unchanged file
        self._stored: MonitorSettings | None = (
            self.settings if self.store.path.exists() else None
        )

        # Allow dependency injection or create defaults
        self.presenter = presenter or DesktopPresenter(self.settings)
        self.power_source = power_source or SysfsPowerSource()
        self.executor = executor or CommandSuspendExecutor()

        self.loop = MonitorLoop(
            self.settings,
            self.presenter,
            self.power_source,
            self.executor,
            on_settings_applied=self._settings_applied,
        )

    def _settings_applied(self, settings: MonitorSettings) -> None:
        self.settings = settings
        if isinstance(self.presenter, DesktopPresenter):
            self.presenter.settings = settings

    def sample(self) -> BatteryReading:
        """Take one battery reading."""
        return self.power_source.sample()

    def describe_status(self) -> str:
        """Return the status summary for the current battery and settings."""
        return describe_status(self.sample(), self.settings)

    def start(self, install_signal_handlers: bool = True) -> None:
        """Run the monitor until stopped by a signal or ``stop()``.

        Args:
            install_signal_handlers: Hook SIGINT/SIGTERM (stop) and SIGHUP
                (reload config); requires the main thread

        Raises:
            NoBatteryError: If no battery is present at startup
        """
        if not self.sample().present:
            raise NoBatteryError("No battery detected! This monitor is for laptops.")

        if install_signal_handlers:
            self._install_signal_handlers()

        try:
            self.loop.run()
        finally:
            if self.settings != self._stored:
                try:
                    self._save(self.settings)
                except ConfigError as exc:
                    logger.warning("Settings not saved on exit: %s", exc)

    def _save(self, settings: MonitorSettings) -> None:
        self.store.save(settings)
        self._stored = settings

    def stop(self) -> None:
        """Ask the monitor loop to stop."""
        self.loop.stop()

    def reload(self) -> MonitorSettings:
        """Re-read the config store and hand the result to the loop."""
        settings = self.store.load()
        self._stored = settings
        self.loop.reconfigure(settings)
        return settings

    def save_settings(self, settings: MonitorSettings) -> None:
        """Persist new settings and apply them at the next cycle boundary.

        Raises:
            ConfigError: If the settings cannot be written
        """
        self._save(settings)
        self.loop.reconfigure(settings)
        self.presenter.notify(
            Urgency.NORMAL, "Settings Saved", "Battery monitor settings have been updated!"
        )

    def select_suspend_method(self, method: SuspendMethod) -> MonitorSettings:
        """Make ``method`` the primary suspend method and save it."""
        settings = self.settings.model_copy(update={"suspend_method": method})
        self._save(settings)
        self.loop.reconfigure(settings)
        self.settings = settings
        self.presenter.notify(Urgency.NORMAL, "Suspend Method Updated", method.label)
        return settings

    def test_suspend(self, delay: float = TEST_SUSPEND_DELAY_SECONDS) -> SequenceOutcome:
        """Try the primary suspend method after a short notice.

        Only the primary method is attempted; no fallbacks.
        """
        method = self.settings.suspend_method
        self.presenter.notify(
            Urgency.NORMAL, "Testing Suspend", f"System will suspend in {delay:g} seconds..."
        )
        time.sleep(delay)

        logger.info("Testing suspend method: %s", method.label)
        if try_suspend_methods([method], self.executor):
            return SequenceOutcome.SUSPENDED
        return SequenceOutcome.SUSPEND_FAILED

    def _install_signal_handlers(self) -> None:
        def handle_stop(signum: int, _frame: FrameType | None) -> None:
            logger.info("Received signal %d, shutting down gracefully...", signum)
            self.stop()

        def handle_reload(_signum: int, _frame: FrameType | None) -> None:
            logger.info("Reloading configuration")
            self.reload()

        signal.signal(signal.SIGINT, handle_stop)
        signal.signal(signal.SIGTERM, handle_stop)
        if hasattr(signal, "SIGHUP"):
            signal.signal(signal.SIGHUP, handle_reload)

    @classmethod
    def create_for_testing(
        cls,
        readings: list[BatteryReading] | None = None,
        settings: MonitorSettings | None = None,
        executor: SuspendExecutor | None = None,
        config_path: Path | None = None,
    ) -> BatteryMonitor:
        """Create a BatteryMonitor wired to in-memory fakes.

        Args:
            readings: Readings returned in order; the last one repeats
            settings: Settings to start with (defaults if None)
            executor: Suspend executor (one that always fails if None)
            config_path: Config file; a fresh temp file if None

        Returns:
            BatteryMonitor instance configured for testing
        """
        import tempfile

        if config_path is None:
            tmp_dir = Path(tempfile.mkdtemp(prefix="battwatch-"))
            config_path = tmp_dir / "battwatch.conf"

        store = create_config_store(config_path)
        if settings is not None:
            store.save(settings)

        return cls(
            store=store,
            presenter=MockPresenter(),
            power_source=_ScriptedPowerSource(readings or [BatteryReading(True, 80)]),
            executor=executor or _FailingExecutor(),
            debug=True,
        )


class _ScriptedPowerSource:
    def __init__(self, readings: list[BatteryReading]) -> None:
        self.readings = list(readings)

    def sample(self) -> BatteryReading:
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


class _FailingExecutor:
    def __init__(self) -> None:
        self.attempts: list[SuspendMethod] = []

    def attempt(self, method: SuspendMethod) -> bool:
        self.attempts.append(method)
        return False
