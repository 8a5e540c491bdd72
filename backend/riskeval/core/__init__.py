from riskeval.core.config import Settings, get_settings, settings
from riskeval.core.logging import RecordLogger, get_logger

__all__ = [
    "RecordLogger",
    "Settings",
    "get_logger",
    "get_settings",
    "settings",
]
