"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

import time

import redis
from tabulate import tabulate

from .base import CommandInterface, add_config_argument, load_config
from ..errors import ConfigurationError
from ..role import Role


class CheckCommand(CommandInterface):
    """逐个ping配置中的所有服务器，打印连接状态"""

    @classmethod
    def name(cls):
        return "check"

    @classmethod
    def register(cls, subparsers):
        parser = subparsers.add_parser("check", help="检查配置中所有redis服务器是否可连接")
        add_config_argument(parser)
        parser.add_argument("--store", help="只检查指定的逻辑库", metavar="cache")

    @classmethod
    def execute(cls, args) -> int:
        conf = load_config(args.config)
        stores = [args.store] if args.store else conf.stores()

        rows = []
        failed = False
        for store in stores:
            for role in Role:
                try:
                    endpoints = conf.get_endpoints(store, role)
                except ConfigurationError as e:
                    rows.append((store, role, "-", f"❌ {e}", "-"))
                    # 没有slave配置只是不能读写分离
                    failed |= role is Role.MASTER
                    continue
                for endpoint in endpoints:
                    client = redis.Redis(**{
                        "socket_connect_timeout": conf.connect_timeout,
                        "socket_timeout": conf.connect_timeout,
                        **endpoint.client_kwargs(),
                    })
                    start = time.perf_counter()
                    try:
                        client.ping()
                        latency = f"{(time.perf_counter() - start) * 1000:.1f}ms"
                        rows.append((store, role, endpoint, "✅ OK", latency))
                    except (redis.exceptions.RedisError, OSError) as e:
                        rows.append((store, role, endpoint, f"❌ {e}", "-"))
                        failed = True
                    finally:
                        client.close()

        print(tabulate(rows, headers=["逻辑库", "角色", "服务器", "状态", "延迟"],
                       tablefmt="github"))
        return 1 if failed else 0
