"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com

组合操作定义。每个操作在定义时就固定了使用的服务器角色，不通过命令名推断。

注意：带ttl的写操作都是先EXPIRE再写入，两步不是原子的，中间进程崩溃会导致
key没有过期时间。另外redis的EXPIRE对不存在的key无效，SET又会清除已有的过期时间，
所以set对新key实际不会生效过期时间，需要精确过期请直接用call("set", key, value, ex=ttl)。
"""

from dataclasses import dataclass
from typing import Any, Callable

import redis

from .role import Role

OPERATIONS: dict[str, "Operation"] = {}


@dataclass(frozen=True)
class Operation:
    name: str
    role: Role
    func: Callable[..., Any]
    # ttl参数在args中的位置，None表示不检查
    ttl_arg: int | None = None

    def __call__(self, client: redis.Redis, *args):
        return self.func(client, *args)


def define_operation(role: Role, ttl_arg: int | None = None):
    """
    定义组合操作，注册到OPERATIONS。被装饰函数的第一个参数是redis连接。

    ttl_arg指定第几个参数（不含redis连接）是必填的过期时间，为空时操作直接失败，
    不会建立任何连接。
    """

    def warp(func):
        op = Operation(func.__name__, role, func, ttl_arg)
        assert op.name not in OPERATIONS, f"重复定义的操作：{op.name}"
        OPERATIONS[op.name] = op
        return op

    return warp


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise KeyError(f"未定义的操作：{name}") from None


def is_empty_ttl(ttl: Any) -> bool:
    """None、False、0、空字符串和"0"都视为未设置"""
    return not ttl or ttl == "0"


def expire_time(client: redis.Redis, key, ttl):
    return client.expire(key, ttl)


@define_operation(Role.SLAVE)
def get(client: redis.Redis, key):
    return client.get(key)


@define_operation(Role.MASTER, ttl_arg=2)
def set(client: redis.Redis, key, value, ttl):  # noqa: A001
    expire_time(client, key, ttl)
    return client.set(key, value)


@define_operation(Role.MASTER)
def set_if_absent(client: redis.Redis, key, value, ttl=None):
    if not is_empty_ttl(ttl):
        expire_time(client, key, ttl)
    return client.setnx(key, value)


@define_operation(Role.MASTER, ttl_arg=1)
def incr(client: redis.Redis, key, ttl):
    expire_time(client, key, ttl)
    return client.incr(key)


@define_operation(Role.MASTER, ttl_arg=2)
def incr_by_step(client: redis.Redis, key, step, ttl):
    expire_time(client, key, ttl)
    return client.incrby(key, step)


@define_operation(Role.MASTER)
def push(client: redis.Redis, key, value, ttl=None):
    if not is_empty_ttl(ttl):
        expire_time(client, key, ttl)
    return client.lpush(key, value)


@define_operation(Role.MASTER)
def pop(client: redis.Redis, key):
    return client.rpop(key)


# 操作名不在只读白名单里，和直接call("llen")不同，走master
@define_operation(Role.MASTER)
def list_len(client: redis.Redis, key):
    return client.llen(key)


@define_operation(Role.MASTER)
def delete(client: redis.Redis, key):
    return client.delete(key)
