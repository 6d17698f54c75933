from .slowlog import SlowLog

__all__ = ["SlowLog"]
