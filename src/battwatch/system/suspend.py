"""Suspend executors: one attempt at one suspend mechanism."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from battwatch.common.enums import SuspendMethod
from battwatch.constants import KERNEL_POWER_STATE

logger: Final = logging.getLogger(__name__)

SUSPEND_COMMANDS: Final[dict[SuspendMethod, list[str]]] = {
    SuspendMethod.SYSTEMD: ["systemctl", "suspend"],
    SuspendMethod.PM_UTILS: ["pm-suspend"],
    SuspendMethod.DBUS_LOGIN: [
        "dbus-send",
        "--system",
        "--print-reply",
        "--dest=org.freedesktop.login1",
        "/org/freedesktop/login1",
        "org.freedesktop.login1.Manager.Suspend",
        "boolean:true",
    ],
}


@runtime_checkable
class SuspendExecutor(Protocol):
    """Protocol for suspend mechanisms."""

    def attempt(self, method: SuspendMethod) -> bool:
        """Try to suspend the machine with one method.

        Args:
            method: The suspend mechanism to use

        Returns:
            True if the mechanism reported success, False otherwise
            (including when the method is unsupported here)
        """
        ...


class CommandSuspendExecutor:
    """Runs the OS command bound to each suspend method."""

    def __init__(
        self,
        power_state_path: Path = KERNEL_POWER_STATE,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the executor.

        Args:
            power_state_path: Kernel sleep-state file used by KERNEL_DIRECT
            timeout: Seconds to wait for a suspend command to return
        """
        self.power_state_path = power_state_path
        self.timeout = timeout

    def attempt(self, method: SuspendMethod) -> bool:
        if method is SuspendMethod.KERNEL_DIRECT:
            return self._write_power_state()

        cmd = SUSPEND_COMMANDS.get(method)
        if cmd is None:
            logger.warning("No command bound to suspend method %s", method.name)
            return False

        logger.info("Using suspend method: %s", " ".join(cmd))
        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            logger.warning(
                "Suspend command %s failed (exit %d): %s",
                cmd[0],
                exc.returncode,
                (exc.stderr or "").strip(),
            )
            return False
        except FileNotFoundError:
            logger.warning("Suspend command %s not found", cmd[0])
            return False
        except (subprocess.TimeoutExpired, OSError) as exc:
            logger.warning("Suspend command %s failed: %s", cmd[0], exc)
            return False
        return True

    def _write_power_state(self) -> bool:
        try:
            with open(self.power_state_path, "w", encoding="utf-8") as f:
                f.write("mem")
        except OSError as exc:
            logger.warning("Failed to write %s: %s", self.power_state_path, exc)
            return False

        logger.info("Suspend requested via %s", self.power_state_path)
        return True
