"""
Parser for the key property list of an object name.

Grammar, applied from the start of the string until no pair matches:

    pair    := key "=" value
    key     := one or more characters other than , = : * ?
    value   := quoted | unquoted
    quoted  := '"' ( any char but \\ or '"' | '\\' any char but a line terminator )* '"'
    unquoted:= zero or more characters other than , = : "

A single comma after a pair is consumed as the separator. Quoted values keep
their quotes and escapes verbatim. Parsing is lenient: the first position
where no pair can be matched ends the scan, and whatever was collected so far
is the result.
"""

from __future__ import annotations

import threading

KEY_TERMINATORS = frozenset(",=:*?")
UNQUOTED_TERMINATORS = frozenset(',=:"')
PAIR_SEPARATOR = ","
QUOTE = '"'
ESCAPE = "\\"
LINE_TERMINATORS = frozenset("\n\r\u0085\u2028\u2029")


def _scan_quoted(text: str, start: int) -> int | None:
    """Index of the closing quote of the quoted value opening at `start`, or None."""
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == QUOTE:
            return i
        if ch == ESCAPE:
            if i + 1 >= n or text[i + 1] in LINE_TERMINATORS:
                return None
            i += 2
            continue
        i += 1
    return None


def _match_pair(text: str, pos: int) -> tuple[str, str, int] | None:
    """Match one `key=value` at `pos`; returns (key, value, end) or None."""
    n = len(text)
    key_end = pos
    while key_end < n and text[key_end] not in KEY_TERMINATORS:
        key_end += 1
    if key_end == pos or key_end >= n or text[key_end] != "=":
        return None

    value_start = key_end + 1
    if value_start < n and text[value_start] == QUOTE:
        close = _scan_quoted(text, value_start)
        if close is not None:
            return text[pos:key_end], text[value_start : close + 1], close + 1
        # unterminated quote: falls through to an empty unquoted value

    value_end = value_start
    while value_end < n and text[value_end] not in UNQUOTED_TERMINATORS:
        value_end += 1
    return text[pos:key_end], text[value_start:value_end], value_end


def parse_key_property_list(properties: str) -> dict[str, str]:
    """
    Split an encoded property list into an insertion-ordered dict.

    A repeated key overwrites the earlier value but keeps its original
    position. Never raises; malformed trailing input is dropped.

    Args:
        properties: The part of an object name after the domain separator

    Returns:
        Ordered mapping of key to raw value (possibly empty)
    """
    result: dict[str, str] = {}
    pos = 0
    n = len(properties)
    while True:
        matched = _match_pair(properties, pos)
        if matched is None:
            return result
        key, value, pos = matched
        result[key] = value
        if pos < n and properties[pos] == PAIR_SEPARATOR:
            pos += 1


class PropertyListParser:
    """
    Callable wrapper around `parse_key_property_list` that counts invocations.

    The cache accepts any `str -> dict[str, str]` callable; this one lets
    callers observe how often a parse actually happened.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls = 0

    @property
    def calls(self) -> int:
        return self._calls

    def parse(self, properties: str) -> dict[str, str]:
        with self._lock:
            self._calls += 1
        return parse_key_property_list(properties)

    __call__ = parse


__all__ = ["parse_key_property_list", "PropertyListParser"]
