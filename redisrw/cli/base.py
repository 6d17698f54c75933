"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

from ..conf import RedisConf
from ..safelogging import setup_logging


class CommandInterface:
    @classmethod
    def name(cls):
        raise NotImplementedError("Subclasses should implement this method.")

    @classmethod
    def register(cls, subparsers):
        pass

    @classmethod
    def execute(cls, args) -> int:
        raise NotImplementedError("Subclasses should implement this method.")


def add_config_argument(parser):
    parser.add_argument(
        "--config", required=True, help="配置文件模板见CONFIG_TEMPLATE.yml", metavar="config.yml"
    )


def load_config(path: str) -> RedisConf:
    """读取配置文件，并按配置中的LOGGING初始化日志"""
    config_dict = RedisConf.read_file(path)
    setup_logging(config_dict)
    return RedisConf.from_dict(config_dict)
