"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

import logging
import random

import redis

from .conf import RedisConf
from .errors import StoreConnectionError
from .pool import Link
from .role import Role

logger = logging.getLogger("RedisRW.root")


class ConnectionFactory:
    """
    根据配置建立redis连接。连接超时固定为配置中的CONNECT_TIMEOUT（默认2秒），
    失败不会重试，直接抛出异常。
    """

    def __init__(self, conf: RedisConf, client_cls: type = redis.Redis):
        self.conf = conf
        self.client_cls = client_cls

    def create(self, store: str, role: Role) -> Link:
        """
        建立(store, role)的新连接。如果该角色配置了多个服务器，随机选择一个。

        Exceptions
        --------
        ConfigurationError
            配置中没有(store, role)的服务器
        StoreConnectionError
            连接失败或超时
        """
        endpoint = random.choice(self.conf.get_endpoints(store, role))

        # url中的参数优先于全局配置
        kwargs = {
            "socket_connect_timeout": self.conf.connect_timeout,
            "socket_timeout": self.conf.socket_timeout,
            "decode_responses": self.conf.decode_responses,
            **endpoint.client_kwargs(),
        }
        client = self.client_cls(**kwargs)
        # redis-py是用到时才连接，这里ping一次确认连接正常
        try:
            client.ping()
        except (redis.exceptions.RedisError, OSError) as e:
            client.close()
            raise StoreConnectionError(
                f"无法连接到{store}的{role}服务器 {endpoint}：{e}",
                store=store,
                role=role,
                endpoint=endpoint,
            ) from e

        logger.debug(f"✅ [💾Redis] 已连接{store}的{role}服务器 {endpoint}")
        return Link(store=store, role=role, endpoint=endpoint, client=client)
