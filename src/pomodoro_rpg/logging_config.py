"""structlog 配置模块

dev 模式：彩色控制台输出，便于本地观察计时器与任务循环
json 模式：结构化 JSON 输出，一行一个事件
日志统一写到 stderr，CLI 的 stdout 只留给命令结果。
"""

import logging
import os
import sys

import structlog

_DEFAULT_FORMAT = "dev"
_DEFAULT_LEVEL = "INFO"


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 配置

    参数优先于环境变量：
    - POMODORO_RPG_LOG_FORMAT: "json" 或 "dev"（默认）
    - POMODORO_RPG_LOG_LEVEL: 日志级别（默认 INFO）

    Args:
        log_format: 渲染模式，None 时读取环境变量
        log_level: 日志级别名，None 时读取环境变量
    """
    log_format = log_format or os.environ.get("POMODORO_RPG_LOG_FORMAT", _DEFAULT_FORMAT)
    log_level = log_level or os.environ.get("POMODORO_RPG_LOG_LEVEL", _DEFAULT_LEVEL)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    # 重复调用时替换已有 handler
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
