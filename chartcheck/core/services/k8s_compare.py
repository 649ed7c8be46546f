"""Comparison helpers for rendered objects.

Rendered YAML says ``initialDelaySeconds: 0`` or ``value: ""`` where a
typed Kubernetes client would see an unset field, so expected values are
compared against pruned actuals. Resource quantities are compared by
value: ``500m`` and ``0.5`` are the same CPU.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

_BINARY_SUFFIXES = {
    "Ki": 2**10,
    "Mi": 2**20,
    "Gi": 2**30,
    "Ti": 2**40,
    "Pi": 2**50,
    "Ei": 2**60,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?:(?P<exp>[eE][+-]?\d+)|(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE])?)$"
)


def _is_zero(value: Any) -> bool:
    # bool is an int subclass; False and 0 are both zero values
    return value is None or value == "" or (isinstance(value, (int, float)) and value == 0)


def prune_zero_values(obj: Any, *, drop_empty: bool = False) -> Any:
    """Drop mapping entries holding None, 0, False or "" (recursively).

    Empty dicts and lists are kept unless ``drop_empty`` is set, since
    ``requests: {}`` and an absent ``requests`` are different things.
    List elements are never dropped.
    """
    if isinstance(obj, dict):
        pruned = {}
        for key, value in obj.items():
            value = prune_zero_values(value, drop_empty=drop_empty)
            if _is_zero(value):
                continue
            if drop_empty and isinstance(value, (dict, list)) and not value:
                continue
            pruned[key] = value
        return pruned
    if isinstance(obj, list):
        return [prune_zero_values(v, drop_empty=drop_empty) for v in obj]
    return obj


def parse_quantity(value: str | int | float) -> Decimal:
    """Parse a Kubernetes resource quantity into a Decimal.

    Raises:
        ValueError: If ``value`` is not a valid quantity.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, (int, float)):
        return Decimal(str(value))

    m = _QUANTITY_RE.match(value.strip())
    if not m:
        raise ValueError(f"Invalid quantity: {value!r}")

    try:
        number = Decimal(m.group("number"))
        if m.group("exp"):
            return number * (Decimal(10) ** int(m.group("exp")[1:]))
    except InvalidOperation as e:
        raise ValueError(f"Invalid quantity: {value!r}") from e

    suffix = m.group("suffix") or ""
    if suffix in _BINARY_SUFFIXES:
        return number * _BINARY_SUFFIXES[suffix]
    return number * _DECIMAL_SUFFIXES[suffix]


def normalize_resources(resources: dict[str, Any] | None) -> dict[str, Any] | None:
    """Resource requirements with every quantity parsed to a Decimal.

    ``None`` sections (limits/requests) are dropped; empty ones are kept.
    """
    if resources is None:
        return None
    normalized: dict[str, Any] = {}
    for section, quantities in resources.items():
        if quantities is None:
            continue
        if section in ("limits", "requests") and isinstance(quantities, dict):
            normalized[section] = {
                name: parse_quantity(q) for name, q in quantities.items() if q is not None
            }
        else:
            normalized[section] = quantities
    return normalized
