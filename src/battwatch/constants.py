from pathlib import Path

# Threshold defaults (percent)
DEFAULT_WARNING_LEVEL = 20
DEFAULT_CRITICAL_LEVEL = 10

# Timing defaults (seconds)
DEFAULT_CHECK_INTERVAL = 30
DEFAULT_ALERT_TIMEOUT = 30
DEFAULT_WARNING_REPEAT = 120
DEFAULT_CRITICAL_REPEAT = 30
DEFAULT_GRACE_SECONDS = 10.0
TEST_SUSPEND_DELAY_SECONDS = 3.0
NORMAL_NOTIFICATION_TIMEOUT_MS = 5000

# Icon theme names
DEFAULT_ICON_CHARGING = "battery-caution-charging"
DEFAULT_ICON_BATTERY = "battery-good"
DEFAULT_ICON_LOW = "battery-caution"
ICON_MISSING = "battery-missing"

APP_NAME = "Cool Little Battery Monitor"

# Configuration file lookup
CONFIG_ENV_VAR = "BATTWATCH_CONFIG"
CONFIG_FILE_NAME = "cool-little-battery-monitor.conf"
FALLBACK_CONFIG_PATH = Path("/tmp") / CONFIG_FILE_NAME

# Battery devices probed in order
POWER_SUPPLY_ROOT = Path("/sys/class/power_supply")
BATTERY_NAMES = ("BAT0", "BAT1")

KERNEL_POWER_STATE = Path("/sys/power/state")
