from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Container, Mapping

from beancache.names import AttributeInfo, MetadataSource, ObjectName
from beancache.parser import parse_key_property_list
from beancache.utils.concurrent_map import DEFAULT_SHARDS, ConcurrentMap
from beancache.utils.logger import logger, timeit

if TYPE_CHECKING:
    from beancache.config import Settings

"""
Per-bean cache of parsed key property lists and attribute metadata.

A poll loop enumerates the same beans every cycle. Parsing each name's key
property list and fetching its attribute descriptors on every cycle is
wasteful, so both are memoized per `ObjectName` and swept with `reconcile`
once the loop knows the full set of beans still present.
"""

KeyProperties = Mapping[str, str]
Parser = Callable[[str], dict[str, str]]


class MBeanPropertyCache:
    """
    Memoizes key property lists and attribute metadata per object name.

    Two independent lock-striped maps back the cache:
    - parsed key property lists, filled on first lookup and kept until the
      name disappears from a `reconcile` set;
    - attribute descriptors, used only while metadata caching is enabled.

    Usage:
        cache = MBeanPropertyCache(cache_attribute_info=True)

        for name in names:
            props = cache.get_key_property_list(name)
            attrs = cache.get_attributes(name, server.get_attributes)

        cache.reconcile(set(names))
    """

    def __init__(
        self,
        cache_attribute_info: bool = False,
        *,
        parser: Parser | None = None,
        shards: int = DEFAULT_SHARDS,
    ) -> None:
        """
        Initialize the cache.

        Args:
            cache_attribute_info: Whether attribute metadata is cached initially
            parser: Property list parser (defaults to `parse_key_property_list`)
            shards: Lock stripes per map
        """
        self._parse: Parser = parser or parse_key_property_list
        self._key_properties: ConcurrentMap[ObjectName, KeyProperties] = ConcurrentMap(shards)
        self._attribute_info: ConcurrentMap[ObjectName, tuple[AttributeInfo, ...]] = ConcurrentMap(shards)
        self._cache_attribute_info = cache_attribute_info
        self._flag_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, *, parser: Parser | None = None) -> MBeanPropertyCache:
        return cls(
            settings.CACHE_ATTRIBUTE_INFO,
            parser=parser,
            shards=settings.CACHE_SHARDS,
        )

    @property
    def metadata_caching_enabled(self) -> bool:
        return self._cache_attribute_info

    @property
    def key_properties_per_bean(self) -> dict[ObjectName, KeyProperties]:
        return self._key_properties.snapshot()

    @property
    def attribute_info_per_bean(self) -> dict[ObjectName, tuple[AttributeInfo, ...]]:
        return self._attribute_info.snapshot()

    def get_key_property_list(self, name: ObjectName) -> KeyProperties:
        """
        Return the ordered key properties of `name`, parsing them on first use.

        The returned mapping is read-only and shared by every caller that asks
        for an equal name until the entry is evicted.
        """
        cached = self._key_properties.get(name)
        if cached is not None:
            return cached

        parsed = MappingProxyType(self._parse(name.key_property_list_string))
        return self._key_properties.put_if_absent(name, parsed)

    def get_attributes(
        self, name: ObjectName, metadata_source: MetadataSource
    ) -> tuple[AttributeInfo, ...]:
        """
        Return the attribute descriptors of `name`.

        With metadata caching disabled every call goes to `metadata_source`.
        Otherwise the first successful fetch is stored and reused. Exceptions
        raised by `metadata_source` propagate and leave the cache untouched.
        """
        if not self._cache_attribute_info:
            return tuple(metadata_source(name))

        cached = self._attribute_info.get(name)
        if cached is not None:
            return cached

        fetched = tuple(metadata_source(name))
        return self._attribute_info.put_if_absent(name, fetched)

    def set_metadata_caching_enabled(self, enabled: bool) -> None:
        """
        Turn attribute metadata caching on or off.

        Disabling clears the metadata map right away so a later re-enable
        starts empty instead of serving entries cached before the switch.
        """
        with self._flag_lock:
            if self._cache_attribute_info and not enabled:
                cleared = self._attribute_info.clear()
                logger.info(f"Attribute metadata caching disabled, dropped {cleared} entries")
            self._cache_attribute_info = enabled

    @timeit
    def reconcile(self, current_names: Container[ObjectName]) -> int:
        """
        Keep only entries whose name is in `current_names`, in both maps.

        Args:
            current_names: Every name seen in the latest enumeration

        Returns:
            Number of entries evicted across both maps
        """
        evicted_properties = self._key_properties.retain(current_names)
        evicted_attributes = self._attribute_info.retain(current_names)
        if evicted_properties or evicted_attributes:
            logger.debug(
                f"Reconciled bean cache: evicted {evicted_properties} key property lists, "
                f"{evicted_attributes} attribute lists"
            )
        return evicted_properties + evicted_attributes

    def get_stats(self) -> dict[str, Any]:
        """
        Get cache statistics for monitoring and tuning.

        Returns:
            Dictionary with per-map counters, sizes and hit rates
        """
        stats: dict[str, Any] = {"metadata_caching_enabled": self._cache_attribute_info}
        for label, store in (
            ("key_properties", self._key_properties),
            ("attribute_info", self._attribute_info),
        ):
            counters = store.stats()
            lookups = counters["hits"] + counters["misses"]
            hit_rate = counters["hits"] / lookups if lookups > 0 else 0
            stats[label] = {**counters, "hit_rate": f"{hit_rate:.2%}"}
        return stats


__all__ = ["MBeanPropertyCache", "KeyProperties"]
