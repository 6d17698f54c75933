"""
@author: Heerozh (Zhang Jianhao)
@copyright: Copyright 2024-2025, Heerozh. All rights reserved.
@license: Apache2.0 可用作商业项目，再随便找个角落提及用到了此项目 :D
@email: heeroz@gmail.com
"""

import contextvars
import logging
import os

log_context_var = contextvars.ContextVar("redis_ctx", default="[None|None|None]")


class ContextFilter(logging.Filter):
    """
    往日志中注入当前调用的上下文：[逻辑库|角色|命令]，以及进程标识。
    """

    IDENT = os.environ.get("REDISRW_WORKER_IDENTIFIER", f"PID{os.getpid()}")

    @classmethod
    def set_log_context(cls, ctx: str) -> contextvars.Token:
        return log_context_var.set(ctx)

    @classmethod
    def reset_log_context(cls, token: contextvars.Token) -> None:
        log_context_var.reset(token)

    @classmethod
    def get_log_context(cls) -> str:
        return log_context_var.get()

    def filter(self, record):
        record.ident = self.IDENT
        record.ctx = log_context_var.get()
        return True
