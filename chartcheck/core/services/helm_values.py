"""Value overrides — building the ``--set`` side of a render.

Test cases describe overrides as flat ``{"dotted.key": "value"}`` maps.
Helm parses each ``--set`` argument itself (``null``, booleans, numbers,
``{a,b}`` lists, ``a[0].b`` indexing), so values are passed through
unchanged unless the caller asks for them to be taken literally.
"""

from __future__ import annotations

import random
import string

_ID_ALPHABET = string.ascii_letters + string.digits


def merge_values(*maps: dict[str, str] | None) -> dict[str, str]:
    """Merge override maps left to right; later keys win."""
    merged: dict[str, str] = {}
    for m in maps:
        if m:
            merged.update(m)
    return merged


def encode_set_value(value: str) -> str:
    """Escape backslashes and commas so helm reads ``value`` verbatim."""
    return value.replace("\\", "\\\\").replace(",", "\\,")


def set_args(values: dict[str, str], *, literal: bool = False) -> list[str]:
    """``["--set", "k=v", ...]`` sorted by key.

    With ``literal`` set, every value goes through :func:`encode_set_value`
    and helm's list syntax is switched off.
    """
    args: list[str] = []
    for key in sorted(values):
        value = str(values[key])
        if literal:
            value = encode_set_value(value)
        args.extend(["--set", f"{key}={value}"])
    return args


def parse_set_pairs(pairs: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Parse ``key=value`` strings (CLI ``--set`` options) into a map.

    Raises:
        ValueError: If a pair has no ``=`` or an empty key.
    """
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got {pair!r}")
        values[key.strip()] = value
    return values


def unique_id(length: int = 6) -> str:
    """Short random base62 identifier."""
    return "".join(random.choices(_ID_ALPHABET, k=length))


def unique_namespace(prefix: str) -> str:
    """A throwaway namespace name: ``prefix`` plus a lowercase random id."""
    return f"{prefix}{unique_id().lower()}"
