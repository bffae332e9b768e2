from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from .cache import MBeanPropertyCache
from .config import Settings, settings
from .names import AttributeInfo, MalformedObjectNameError, MetadataSource, ObjectName
from .parser import PropertyListParser, parse_key_property_list
from .utils.logger import PACKAGE, configure_logging, logger

"""
beancache
=========

Lookup cache in front of a bean polling loop: parses the key property list of
each object name once, optionally memoizes attribute metadata, and sweeps
entries for beans that disappeared.

Public objects
--------------
__version__ : str
    Semantic version string, filled at build time.
"""

__all__ = [
    "__version__",
    "settings",
    "Settings",
    "MBeanPropertyCache",
    "ObjectName",
    "AttributeInfo",
    "MetadataSource",
    "MalformedObjectNameError",
    "PropertyListParser",
    "parse_key_property_list",
    "configure_logging",
]

# Hosts opt in with configure_logging() or logger.enable("beancache").
logger.disable(PACKAGE)

try:
    __version__: str = _version("beancache")
except PackageNotFoundError:
    __version__ = "0.1.0"
