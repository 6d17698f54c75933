from .default import DEFAULT_LOGGING_CONFIG, setup_logging
from .filter import ContextFilter

__all__ = ["DEFAULT_LOGGING_CONFIG", "setup_logging", "ContextFilter"]
