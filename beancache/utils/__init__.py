from .concurrent_map import ConcurrentMap
from .logger import FORMAT, PACKAGE, configure_logging, logger, timeit

__all__ = [
    "ConcurrentMap",
    "logger",
    "FORMAT",
    "PACKAGE",
    "configure_logging",
    "timeit",
]
