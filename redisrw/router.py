"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

import logging
import time
from typing import Any, Callable, NamedTuple

from redis.commands import CoreCommands

from .common.slowlog import SlowLog
from .conf import RedisConf
from .errors import ExecutionError, RedisRWError, TTLRequiredError
from .factory import ConnectionFactory
from .operations import Operation, get_operation, is_empty_ttl
from .pool import ConnectionPool, Link
from .role import Role, classify
from .safelogging.filter import ContextFilter

logger = logging.getLogger("RedisRW.root")

# redis命令名和redis-py方法名不一致的
COMMAND_ALIASES = {
    "del": "delete",
}

SHARED_SLOWLOG = SlowLog()


class CallResult(NamedTuple):
    """调用结果，ok为True时value为命令返回值，否则error为失败原因"""

    ok: bool
    value: Any = None
    error: Exception | None = None


class RedisRouter:
    """
    读写分离的redis访问入口，每个逻辑库一个实例。

    写命令走master，只读命令走slave。只要连接池中已有该库可用的master连接，
    读命令也会走master，以减少主从延迟导致读到旧数据的几率。

    所有方法都不会抛出异常，失败时记录error日志，并返回ok为False的CallResult。

    >>> router = RedisRouter("cache", RedisConf.load("config.yml"))  # noqa
    >>> ok, value, err = router.call("hgetall", "user:1")  # noqa
    """

    def __init__(
        self,
        store: str,
        conf: RedisConf | None = None,
        pool: ConnectionPool | None = None,
        factory: ConnectionFactory | None = None,
        slowlog: SlowLog | None = None,
    ):
        self.store = store
        self._conf = conf
        # 注意ConnectionPool有__len__，空池也是False，不能用or
        self.pool = pool if pool is not None else ConnectionPool.shared()
        self._factory = factory
        self.slowlog = slowlog or SHARED_SLOWLOG

    @property
    def conf(self) -> RedisConf:
        """没有传入配置时，第一次使用才读取默认配置。未设置默认配置抛出ConfigurationError"""
        if self._conf is None:
            self._conf = RedisConf.get_default()
        return self._conf

    @property
    def factory(self) -> ConnectionFactory:
        if self._factory is None:
            self._factory = ConnectionFactory(self.conf, self.pool.client_cls)
        return self._factory

    def resolve(self, role: Role) -> Link:
        """获取本库指定角色的连接，可能返回master连接，失败抛出异常"""
        return self.pool.resolve(self.store, role, self.factory)

    def call(self, command: str, *args, **kwargs) -> CallResult:
        """
        执行任意redis命令，参数和返回值同redis-py对应方法。
        命令名不区分大小写，只读命令白名单以外的命令都在master上执行。
        """
        method_name = command.lower()
        method_name = COMMAND_ALIASES.get(method_name, method_name)

        def _execute(client):
            # 只调用CoreCommands中的命令方法，close/pipeline等客户端方法不能被调用
            if not method_name.startswith("_") and hasattr(CoreCommands, method_name):
                return getattr(client, method_name)(*args, **kwargs)
            # redis-py没有封装的命令，直接发送
            return client.execute_command(command.upper(), *args, **kwargs)

        return self._pipeline(command, classify(command), _execute, args)

    def run(self, operation: Operation | str, *args) -> CallResult:
        """执行operations中定义的组合操作，角色由操作定义决定"""
        try:
            op = get_operation(operation) if isinstance(operation, str) else operation
        except KeyError as e:
            return self._fail(str(operation), None, None, ExecutionError(str(e), self.store))

        if op.ttl_arg is not None:
            ttl = args[op.ttl_arg] if len(args) > op.ttl_arg else None
            if is_empty_ttl(ttl):
                # 不连接服务器，直接失败
                err = TTLRequiredError(f"{op.name}必须指定过期时间", self.store, op.role)
                logger.warning(f"⚠️ [💾Redis] {self.store}.{op.name}{args} 未指定过期时间，已忽略")
                return CallResult(False, None, err)

        return self._pipeline(op.name, op.role, lambda client: op(client, *args), args)

    def _pipeline(
        self, name: str, role: Role, execute: Callable[[Any], Any], args: tuple
    ) -> CallResult:
        token = ContextFilter.set_log_context(f"[{self.store}|{role}|{name}]")
        link = None
        try:
            link = self.resolve(role)
            start = time.perf_counter()
            try:
                value = execute(link.client)
            finally:
                self.slowlog.log(time.perf_counter() - start, name)
            return CallResult(True, value, None)
        except RedisRWError as e:
            return self._fail(name, role, link, e, args)
        except Exception as e:
            err = ExecutionError(
                f"{type(e).__name__}: {e}",
                self.store,
                link.role if link else role,
                link.endpoint if link else None,
            )
            err.__cause__ = e
            return self._fail(name, role, link, err, args)
        finally:
            ContextFilter.reset_log_context(token)

    def _fail(
        self,
        name: str,
        role: Role | None,
        link: Link | None,
        err: RedisRWError,
        args: tuple = (),
    ) -> CallResult:
        endpoint = err.endpoint or (link.endpoint if link else None)
        if endpoint is None and role is not None:
            # 连接前就失败的，尝试记录配置中的地址方便排查
            try:
                endpoint = self.conf.get_server_conf(self.store, role)
            except RedisRWError:
                endpoint = None
        logger.error(
            f"❌ [💾Redis] redis error! {self.store}.{name}{args} 失败，"
            f"异常：{type(err).__name__}:{err}，连接配置：{endpoint!r}",
            exc_info=err.__cause__,
            extra={
                "category": "redis",
                "store": self.store,
                "role": str(role) if role else None,
                "endpoint": endpoint,
                "error": err,
            },
        )
        return CallResult(False, None, err)
