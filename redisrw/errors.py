"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .conf import EndpointConfig
    from .role import Role


class RedisRWError(Exception):
    """
    所有redisrw异常的基类。
    store/role/endpoint记录出错时解析到的连接信息，用于日志诊断，未解析到时为None。
    """

    def __init__(
        self,
        message: str,
        store: str | None = None,
        role: "Role | None" = None,
        endpoint: "EndpointConfig | None" = None,
    ):
        super().__init__(message)
        self.store = store
        self.role = role
        self.endpoint = endpoint


class ConfigurationError(RedisRWError, LookupError):
    """配置中没有(store, role)对应的服务器地址，或配置格式错误"""


class StoreConnectionError(RedisRWError, ConnectionError):
    """连接服务器失败或超时"""


class ExecutionError(RedisRWError):
    """redis客户端执行命令时抛出了异常，包括执行中途的网络错误"""


class TTLRequiredError(RedisRWError, ValueError):
    """写入类操作要求必须指定过期时间"""
