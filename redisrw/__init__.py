"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

from importlib.metadata import PackageNotFoundError, version

from . import operations
from .conf import EndpointConfig, RedisConf
from .errors import (
    ConfigurationError,
    ExecutionError,
    RedisRWError,
    StoreConnectionError,
    TTLRequiredError,
)
from .factory import ConnectionFactory
from .pool import ConnectionPool, Link
from .role import READ_COMMANDS, Role, classify, is_read
from .router import CallResult, RedisRouter
from .safe import FAILED, SafeRedis

try:
    __version__ = version("redisrw")
except PackageNotFoundError:
    __version__ = "redisrw is not installed in a proper way"


__all__ = [
    "operations",
    "EndpointConfig",
    "RedisConf",
    "RedisRWError",
    "ConfigurationError",
    "StoreConnectionError",
    "ExecutionError",
    "TTLRequiredError",
    "ConnectionFactory",
    "ConnectionPool",
    "Link",
    "READ_COMMANDS",
    "Role",
    "classify",
    "is_read",
    "CallResult",
    "RedisRouter",
    "FAILED",
    "SafeRedis",
]
