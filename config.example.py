# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit .env files. This file exists to make the repo self-documenting.
"""

ENV_VARS = {
    # App / logging
    "INFLIGHT_APP_NAME": "App display name (default: inflight).",
    "INFLIGHT_LOG_LEVEL": "Console logging level (default: INFO).",
    "INFLIGHT_LOG_FILE_ENABLED": "Write the full DEBUG log to <data_dir>/inflight.log (true/false).",
    # Front end
    "INFLIGHT_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Scheduler
    "INFLIGHT_MAX_CONCURRENT_TASKS": "How many task bodies may run at once (default: 1 = serial).",
    "INFLIGHT_WAIT_TIMEOUT_SECONDS": "Default timeout for /wait (default: 30).",
    "INFLIGHT_SHUTDOWN_TIMEOUT_SECONDS": "Drain budget before cancelling tasks on exit (default: 10).",
    # Paths (gitignored)
    "INFLIGHT_DATA_DIR": "Local data directory (default: .local/inflight).",
}
