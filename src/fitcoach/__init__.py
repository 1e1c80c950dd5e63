"""fitcoach: progression engine, workout catalog and AI coaching back end."""

__version__ = "0.1.0"
