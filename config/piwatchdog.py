# piwatchdog configuration
# Loaded once at startup by run_watchdog.py --config config/piwatchdog.py

LOG_LEVEL = "NOTICE"   # DEBUG, INFO, NOTICE, WARNING, ERROR, FATAL
LOG_FILE = None        # e.g. "storage/logs/piwatchdog.log"

# ============================================================================
# WATCHDOG
# ============================================================================
# PiWatcher board on I2C bus 1, address 0x62.
#   watch: seconds without a ping before power is cut (0-255, 0 disables)
#   wake:  seconds before power is restored (even, 0-131070)
WATCHDOG = {
    "type": "piwatcher",
    "watch": 120,
    "wake": 10,
}

# Without hardware:
# WATCHDOG = {"type": "dummy", "period": 60}

# ============================================================================
# WATCHERS
# ============================================================================
# period/timeout default to 30 seconds. A watcher that has not succeeded
# for two periods is considered bad.
WATCHERS = [
    {
        "type": "temperature",
        "path": "/sys/class/thermal/thermal_zone0/temp",
        "failure_over": 80000,   # millidegrees
        "period": 30,
        "timeout": 5,
    },
    {
        "type": "url",
        "url": "http://localhost/healthcheck.sh",
        "execute": True,
        "xtrace": False,
        "period": 60,
        "timeout": 30,
    },
]
