from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

"""
Value types shared by the cache and its collaborators.

An `ObjectName` is the identity under which a managed bean publishes its
attributes: a domain plus the encoded `key=value,...` property list. The poll
loop builds fresh instances every cycle, so equality and hashing are
structural over both strings.
"""

DOMAIN_SEPARATOR = ":"


class MalformedObjectNameError(ValueError):
    """Raised when a string cannot be split into domain and property list."""


@dataclass(frozen=True, slots=True)
class ObjectName:
    """
    Immutable managed-resource name.

    Attributes:
        domain: Domain part, everything before the first colon (may be empty)
        key_property_list_string: Encoded property list, kept verbatim
    """

    domain: str
    key_property_list_string: str

    @classmethod
    def from_string(cls, name: str) -> ObjectName:
        """
        Split `domain:key=value,...` at the first colon.

        Raises:
            MalformedObjectNameError: If there is no colon or no property list
        """
        domain, sep, properties = name.partition(DOMAIN_SEPARATOR)
        if not sep:
            raise MalformedObjectNameError(f"missing domain separator in {name!r}")
        if not properties:
            raise MalformedObjectNameError(f"empty key property list in {name!r}")
        return cls(domain, properties)

    def __str__(self) -> str:
        return f"{self.domain}{DOMAIN_SEPARATOR}{self.key_property_list_string}"


@dataclass(frozen=True, slots=True)
class AttributeInfo:
    """Descriptor of one attribute exposed by a bean. Opaque to the cache."""

    name: str
    type: str
    description: str = ""
    is_readable: bool = True
    is_writable: bool = False
    is_is: bool = False


class MetadataSource(Protocol):
    """Fetches the attribute descriptors of a bean; may raise anything."""

    def __call__(self, name: ObjectName) -> Sequence[AttributeInfo]:
        ...


__all__ = [
    "ObjectName",
    "AttributeInfo",
    "MetadataSource",
    "MalformedObjectNameError",
]
