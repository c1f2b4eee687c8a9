"""Normalization helpers.

Centralizes defensive parsing of loosely-typed intel values.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def artifact_kinds(section: Any) -> frozenset[str]:
    """Return the artifact kind ids referenced by one artifact-brief section.

    The intel array form is a list of ``[kind, *extra]`` entries; the
    decoded form is a mapping keyed by kind. Only the kind ids carry
    information, the per-kind values are empty upstream.
    """
    if section is None:
        return frozenset()
    if isinstance(section, Mapping):
        return frozenset(str(kind) for kind in section if safe_str(kind))
    if isinstance(section, (list, tuple)):
        kinds: set[str] = set()
        for entry in section:
            if isinstance(entry, (list, tuple)):
                if not entry:
                    continue
                kind = safe_str(entry[0])
            else:
                kind = safe_str(entry)
            if kind:
                kinds.add(kind)
        return frozenset(kinds)
    raise ValueError(f"artifact brief section must be a list or mapping, got {type(section).__name__}")
