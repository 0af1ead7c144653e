import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """
    Environment-based settings for the web process.

    Model thresholds are not configurable here; see data.THRESHOLDS.
    """
    debug: bool
    log_level: str

    @staticmethod
    def load() -> "AppConfig":
        debug_flag = os.getenv("FLASK_DEBUG", "0") == "1"
        log_level = os.getenv("LOG_LEVEL", "INFO")
        return AppConfig(debug=debug_flag, log_level=log_level)
