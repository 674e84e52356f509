from __future__ import annotations

import re

# The engine appends "_h" + a decimal hash to every registry value name so
# that keys differing only by case or namespace never collide.
_HASH_SUFFIX_RE = re.compile(r"_h\d+\Z")


def key_hash(key: str) -> int:
    """Unsigned 32-bit djb2-xor hash of ``key`` (h = h * 33 ^ c)."""
    h = 5381
    for ch in key:
        h = ((h * 33) ^ ord(ch)) & 0xFFFFFFFF
    return h


def mangle(key: str) -> str:
    return f"{key}_h{key_hash(key)}"


def demangle(name: str) -> str:
    """Strip one trailing ``_h<digits>`` suffix; other names pass through."""
    return _HASH_SUFFIX_RE.sub("", name, count=1)
