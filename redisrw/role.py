"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

from enum import Enum


class Role(Enum):
    """连接的服务器角色，值和配置文件中的键名一致"""

    MASTER = "master"
    SLAVE = "slave"

    def __str__(self):
        return self.value


# 只读命令白名单，在此列表中的命令走从库，其他一律走主库。
# 漏掉的命令只会增加主库压力，不会读到旧数据，所以新增命令不需要同步修改这里。
READ_COMMANDS = frozenset(
    (
        # key
        "TYPE", "KEYS", "SCAN", "RANDOMKEY", "OBJECT", "SORT",
        # string
        "GET", "MGET", "SUBSTR", "STRLEN", "GETRANGE", "GETBIT",
        "BITCOUNT", "BITPOS", "BITFIELD",
        # list
        "LLEN", "LRANGE", "LINDEX",
        # set
        "SCARD", "SISMEMBER", "SINTER", "SUNION", "SDIFF", "SMEMBERS", "SSCAN",
        "SRANDMEMBER",
        # sorted set
        "ZRANGE", "ZREVRANGE", "ZRANGEBYSCORE", "ZREVRANGEBYSCORE", "ZCARD",
        "ZSCORE", "ZCOUNT", "ZRANK", "ZREVRANK", "ZSCAN", "ZLEXCOUNT",
        "ZRANGEBYLEX", "ZREVRANGEBYLEX",
        # hash
        "HGET", "HMGET", "HLEN", "HKEYS", "HVALS", "HGETALL", "HSCAN", "HSTRLEN",
        # connection / server
        "AUTH", "SELECT", "ECHO", "QUIT", "TIME",
        # hyperloglog / geo
        "PFCOUNT",
        "GEOHASH", "GEOPOS", "GEODIST", "GEORADIUS", "GEORADIUSBYMEMBER",
    )
)  # fmt: skip


def is_read(command: str) -> bool:
    """命令是否为只读命令，不区分大小写"""
    return command.upper() in READ_COMMANDS


def classify(command: str) -> Role:
    """
    根据命令名决定使用的服务器角色。

    Parameters
    ----------
    command: str
        redis命令名，或redis-py的方法名，不区分大小写

    Returns
    -------
    role: Role
        只读命令返回 `Role.SLAVE`，其他（包括未知命令）返回 `Role.MASTER`
    """
    return Role.SLAVE if is_read(command) else Role.MASTER
