# -*- coding: utf-8 -*-
APP_NAME = "PNGPANG"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Hide, reveal and remove messages in PNG chunks"

# Logging
LOGGING_SETTINGS = {
    "level": "INFO",           # DEBUG/INFO/WARNING/ERROR
    "console_level": "WARNING",
    "log_dir": "logs",
    "log_file": "pngpang.log",
    "max_bytes": 2 * 1024 * 1024,
    "backup_count": 3,
}

