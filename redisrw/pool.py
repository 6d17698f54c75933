"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com

                      连接获取流程
        ┌──────────────────────────────────────┐
        │ 池中有(store, master)连接，且ping通过？  │──是──► 返回master连接
        └──────────────────────────────────────┘
                           │否
        ┌──────────────────────────────────────┐
        │  池中有(store, role)连接，且ping通过？   │──是──► 返回该连接
        └──────────────────────────────────────┘
                           │否
        ┌──────────────────────────────────────┐
        │ Factory创建新连接，覆盖池中(store, role) │──────► 返回新连接
        └──────────────────────────────────────┘
"""

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import redis

from .role import Role

if TYPE_CHECKING:
    from .conf import EndpointConfig
    from .factory import ConnectionFactory

logger = logging.getLogger("RedisRW.root")


@dataclass(eq=False)
class Link:
    """池中的一个连接，以及它连接的逻辑库、角色和服务器地址"""

    store: str
    role: Role
    endpoint: "EndpointConfig"
    client: redis.Redis


class ConnectionPool:
    """
    进程内的连接池，按(逻辑库名, 角色)保存连接，每对最多保留一个连接。

    注意：为了最大限度避免主从同步延迟读到旧数据，只要池中有可用的master连接，
    所有读写都会优先走master。此偏好按逻辑库生效，而不是按调用方，进程内任何
    调用方建立了某库的master连接后，该库的读操作都会走master。

    失效的连接不会主动关闭，只是被新连接覆盖，由redis-py自己回收。
    """

    _shared: "ConnectionPool | None" = None
    _shared_lock = threading.Lock()

    def __init__(self, client_cls: type = redis.Redis):
        # client_cls用于检查连接类型，必须和ConnectionFactory的一致
        self.client_cls = client_cls
        self._links: dict[tuple[str, Role], Link] = {}
        self._lock = threading.Lock()
        self._create_locks: dict[tuple[str, Role], threading.Lock] = {}

    @classmethod
    def shared(cls) -> "ConnectionPool":
        """进程共享的默认连接池"""
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    def get(self, store: str, role: Role) -> Link | None:
        with self._lock:
            return self._links.get((store, role))

    def put(self, link: Link) -> None:
        """放入连接，无条件覆盖同(store, role)的旧连接"""
        with self._lock:
            self._links[(link.store, link.role)] = link

    def discard(self, store: str, role: Role) -> Link | None:
        with self._lock:
            return self._links.pop((store, role), None)

    def keys(self) -> list[tuple[str, Role]]:
        with self._lock:
            return list(self._links.keys())

    def __len__(self):
        with self._lock:
            return len(self._links)

    def __contains__(self, key: tuple[str, Role]):
        with self._lock:
            return key in self._links

    def clear(self) -> None:
        """清空连接池，不关闭连接"""
        with self._lock:
            self._links.clear()

    def close_all(self) -> None:
        """关闭所有连接并清空连接池，用于进程退出"""
        with self._lock:
            links = list(self._links.values())
            self._links.clear()
        for link in links:
            try:
                link.client.close()
            except (redis.exceptions.RedisError, OSError) as e:
                logger.warning(f"⚠️ [💾Redis] 关闭连接 {link.endpoint} 失败：{e}")

    def is_alive(self, link: Link | None) -> bool:
        """连接类型正确，且ping返回成功，才算可用"""
        if link is None or not isinstance(link.client, self.client_cls):
            return False
        try:
            return link.client.ping() is True
        except (redis.exceptions.RedisError, OSError):
            return False

    def _create_lock(self, key: tuple[str, Role]) -> threading.Lock:
        with self._lock:
            lock = self._create_locks.get(key)
            if lock is None:
                lock = self._create_locks[key] = threading.Lock()
            return lock

    def get_master_link(self, store: str) -> Link | None:
        """获取可用的master连接，没有则返回None"""
        link = self.get(store, Role.MASTER)
        if not self.is_alive(link):
            return None
        return link

    def resolve(self, store: str, role: Role, factory: "ConnectionFactory") -> Link:
        """
        获取连接：
        1. 优先返回可用的master连接，无论需要的是什么角色；
        2. 没有则返回池中可用的(store, role)连接；
        3. 都没有则通过factory新建连接，存入池中。

        Exceptions
        --------
        ConfigurationError
            配置中没有(store, role)的服务器
        StoreConnectionError
            新建连接失败，此时不会修改连接池
        """
        master = self.get_master_link(store)
        if master is not None:
            return master

        stale: Any = None
        if role is not Role.MASTER:
            link = self.get(store, role)
            if self.is_alive(link):
                return link  # type: ignore
            stale = link
        else:
            stale = self.get(store, role)

        # 同一个(store, role)同时只允许一个线程建立连接
        with self._create_lock((store, role)):
            # 等锁期间其他线程可能已经替换了连接
            current = self.get(store, role)
            if current is not None and current is not stale and self.is_alive(current):
                return current

            link = factory.create(store, role)
            self.put(link)
            if stale is not None:
                logger.info(f"ℹ️ [💾Redis] {store}的{role}连接已失效，替换为新连接 {link.endpoint}")
            return link
