from __future__ import annotations

import sys
import time
from functools import wraps
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

from loguru import logger as _loguru_logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    from beancache.config import Settings

"""
beancache.utils.logger
~~~~~~~~~~~~~~~~~~~~~~
Logging for the cache, built on loguru.
Quick Start
-----------
1. **Library use**
    - Importing beancache adds no sinks and leaves existing ones alone; its
      messages stay disabled until the host opts in.
2. **Turning logs on**
    ```python
    from beancache.config import settings
    configure_logging(settings)
    ```
    Adds a Rich console sink (or plain stderr) and, with `LOG_TO_FILE`, a
    rotating file sink under `LOGS_DIR`, then enables the `beancache` loggers.
3. **Timing Functions**
    - Use `@timeit` to log execution time of functions at debug level.
"""

PACKAGE = "beancache"
FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

logger = _loguru_logger  # reexport


def configure_logging(settings: Settings) -> list[int]:
    """
    Add the console and optional file sinks described by `settings`.
    Args:
        settings (Settings): Logging fields (`LOG_LEVEL`, `DISABLE_RICH`, `LOG_TO_FILE`, ...).
    Returns:
        list[int]: Ids of the added sinks, for `logger.remove`.
    """
    sink_ids: list[int] = []

    # ——— console ——— #
    if not settings.DISABLE_RICH:
        sink_ids.append(
            _loguru_logger.add(
                RichHandler(
                    rich_tracebacks=True,
                    markup=False,
                    show_path=False,
                    highlighter=None,
                ),
                level=settings.LOG_LEVEL,
                format="{message}",
            )
        )
    else:
        sink_ids.append(
            _loguru_logger.add(sys.stderr, level=settings.LOG_LEVEL, format=FORMAT, colorize=True)
        )

    # ——— rotating file ——— #
    if settings.LOG_TO_FILE:
        log_dir = settings.LOGS_DIR.expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)
        sink_ids.append(
            _loguru_logger.add(
                log_dir / "beancache_{time:YYYY-MM-DD}.log",
                level="DEBUG",
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                enqueue=True,
                backtrace=False,
                format=FORMAT,
            )
        )

    _loguru_logger.enable(PACKAGE)
    return sink_ids


P = ParamSpec("P")
R = TypeVar("R")


def timeit(fn: Callable[P, R]) -> Callable[P, R]:
    """
    Decorator that measures the execution time of the decorated function and logs it.
    Args:
        fn (Callable[P, R]): The function to be decorated.
    Returns:
        Callable[P, R]: The wrapped function that logs its execution time in milliseconds.
    """

    @wraps(fn)
    def _wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[name-defined]
        t0 = time.perf_counter()
        result: R = fn(*args, **kwargs)
        logger.debug(f"{fn.__qualname__} took {(time.perf_counter() - t0) * 1000:,.1f} ms")
        return result

    return _wrapper


__all__ = ["logger", "timeit", "configure_logging", "FORMAT", "PACKAGE"]
