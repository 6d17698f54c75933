"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

from .base import CommandInterface, add_config_argument, load_config
from ..pool import ConnectionPool
from ..role import classify
from ..router import RedisRouter


class CallCommand(CommandInterface):
    """通过读写分离路由执行一条redis命令"""

    @classmethod
    def name(cls):
        return "call"

    @classmethod
    def register(cls, subparsers):
        parser = subparsers.add_parser("call", help="通过读写分离路由执行一条redis命令")
        add_config_argument(parser)
        parser.add_argument("--store", required=True, help="逻辑库名", metavar="cache")
        # 不能叫command，会覆盖subparsers的dest
        parser.add_argument("redis_command", help="redis命令", metavar="COMMAND")
        parser.add_argument("args", nargs="*", help="命令参数")

    @classmethod
    def execute(cls, args) -> int:
        conf = load_config(args.config)
        pool = ConnectionPool()
        try:
            router = RedisRouter(args.store, conf, pool)
            ok, value, err = router.call(args.redis_command, *args.args)
        finally:
            pool.close_all()
        if not ok:
            print(f"❌ {type(err).__name__}: {err}")
            return 1
        print(f"[{classify(args.redis_command)}] {value!r}")
        return 0
