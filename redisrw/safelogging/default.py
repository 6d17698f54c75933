"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

import copy
import logging.config
from typing import Any

DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {
        'context': {
            '()': 'redisrw.safelogging.filter.ContextFilter',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'generic',
            'filters': ['context'],
            'stream': 'ext://sys.stdout',
        },
    },
    'loggers': {
        'root': {
            'handlers': ['console'],
            'level': 'INFO',
        },
        'RedisRW.root': {
            'level': 'INFO',
        },
    },
    'formatters': {
        'generic': {
            'format': '%(asctime)s [%(ident)s] [%(levelname)s] %(ctx)s %(message)s',
        },
    },
}


def setup_logging(config: dict[str, Any] | None = None) -> None:
    """使用配置中的LOGGING项初始化日志，没有则使用默认配置"""
    logging_config = (config or {}).get('LOGGING') or DEFAULT_LOGGING_CONFIG
    logging.config.dictConfig(copy.deepcopy(logging_config))
