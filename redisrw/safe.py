"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

from typing import Any

from . import operations as ops
from .conf import RedisConf
from .pool import ConnectionPool
from .router import CallResult, RedisRouter


class _Failed:
    """失败返回值，bool为False。用 `is FAILED` 判断，和命令本身返回的False/None区分"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "FAILED"

    def __reduce__(self):
        return _Failed, ()


FAILED = _Failed()


class SafeRedis:
    """
    降级模式的读写分离redis。所有方法都不抛出异常，失败时返回FAILED，
    失败原因只记录在日志里。需要区分失败类型请直接用RedisRouter。

    ！！注意！！为了最大限度保证主从同步，进程中一旦有该库的master连接，之后的读写都优先走master。
    ！！注意！！redis主从同步有延迟，先写后读的数据要注意可能读到旧值。
    """

    def __init__(self, router: RedisRouter):
        self.router = router

    @classmethod
    def get_redis(
        cls,
        store: str,
        conf: RedisConf | None = None,
        pool: ConnectionPool | None = None,
    ) -> "SafeRedis":
        """
        获取逻辑库的访问对象，默认使用RedisConf.set_default设置的配置和进程共享连接池。
        默认配置在第一次调用命令时才读取，未设置时命令返回FAILED。
        """
        return cls(RedisRouter(store, conf, pool))

    @property
    def store(self) -> str:
        return self.router.store

    @staticmethod
    def _unwrap(result: CallResult) -> Any:
        return result.value if result.ok else FAILED

    def execute(self, command: str, *args, **kwargs) -> Any:
        """执行任意redis命令"""
        return self._unwrap(self.router.call(command, *args, **kwargs))

    def get(self, key):
        return self._unwrap(self.router.run(ops.get, key))

    def set(self, key, value, ttl):
        """ttl为空时直接返回FAILED"""
        return self._unwrap(self.router.run(ops.set, key, value, ttl))

    def set_if_absent(self, key, value, ttl=None):
        return self._unwrap(self.router.run(ops.set_if_absent, key, value, ttl))

    def incr(self, key, ttl):
        return self._unwrap(self.router.run(ops.incr, key, ttl))

    def incr_by_step(self, key, step, ttl):
        return self._unwrap(self.router.run(ops.incr_by_step, key, step, ttl))

    def push(self, key, value, ttl=None):
        return self._unwrap(self.router.run(ops.push, key, value, ttl))

    def pop(self, key):
        return self._unwrap(self.router.run(ops.pop, key))

    def list_len(self, key):
        return self._unwrap(self.router.run(ops.list_len, key))

    def delete(self, key):
        return self._unwrap(self.router.run(ops.delete, key))
