import pytest

from fixtures.fake_redis import *
from fixtures.redis_service import *
from fixtures.stores import *


import logging
import sys


@pytest.fixture(autouse=True, scope="session")
def force_print_logging():
    """
    修复PyCharm测试控制台不显示错误日志的问题
    """
    root_logger = logging.getLogger()

    # 直接输出到stderr，PyCharm控制台能捕获stderr
    stream_handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(logging.INFO)
    root_logger.addHandler(stream_handler)

    yield

    # 测试结束后移除这个handler，防止污染
    root_logger.removeHandler(stream_handler)
