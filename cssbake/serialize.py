"""Style serialization: CSS text -> canonical {name, styles} identity.

Names must match the ones the CSS-in-JS runtime computes for the same text,
so the hash is the runtime's 32-bit MurmurHash2 over UTF-16 code units
(low byte of each unit), printed in base 36.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_M = 0x5BD1E995
_MASK = 0xFFFFFFFF
_DIGITS36 = "0123456789abcdefghijklmnopqrstuvwxyz"

LABEL_PATTERN = re.compile(r"label:\s*([^\s;\n{]+)\s*(;|$)")


@dataclass(frozen=True)
class StyleIdentity:
    """Canonical identity of one distinct set of declarations.

    Invariants:
    - equal styles text yields equal name
    - name starts with the base-36 hash, then one "-<label>" per label
    """

    name: str
    styles: str


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits: list[str] = []
    while n > 0:
        n, rem = divmod(n, 36)
        digits.append(_DIGITS36[rem])
    return "".join(reversed(digits))


def murmur2(text: str) -> str:
    """Hash text the way the runtime does; returns a base-36 string."""
    data = text.encode("utf-16-le", "surrogatepass")[0::2]
    h = 0
    i = 0
    length = len(data)
    while length >= 4:
        k = data[i] | (data[i + 1] << 8) | (data[i + 2] << 16) | (data[i + 3] << 24)
        k = (k * _M) & _MASK
        k ^= k >> 24
        h = ((k * _M) & _MASK) ^ ((h * _M) & _MASK)
        i += 4
        length -= 4
    # Tail bytes fall through like the C switch
    if length == 3:
        h ^= data[i + 2] << 16
    if length >= 2:
        h ^= data[i + 1] << 8
    if length >= 1:
        h ^= data[i]
        h = (h * _M) & _MASK
    h ^= h >> 13
    h = (h * _M) & _MASK
    return _to_base36((h ^ (h >> 15)) & _MASK)


def serialize_styles(strings: list[str]) -> StyleIdentity:
    """Serialize static CSS fragments into a StyleIdentity."""
    styles = "".join(strings)
    identifier_name = ""
    for match in LABEL_PATTERN.finditer(styles):
        identifier_name += "-" + match.group(1)
    return StyleIdentity(murmur2(styles) + identifier_name, styles)
