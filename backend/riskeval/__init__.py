"""NTP 330 workplace risk evaluator."""

__version__ = "1.0.0"
