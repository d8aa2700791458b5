"""Best-effort readers for upstream JSON.

Provider payloads are read field by field; anything missing or of the wrong
shape falls back to a default instead of failing the whole call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


def dig(data: Any, *path: Any, default: Any = None) -> Any:
    """Follow dict keys / list indexes; return `default` on the first miss or a None value."""
    cur = data
    for step in path:
        try:
            cur = cur[step]
        except (KeyError, IndexError, TypeError):
            return default
    return default if cur is None else cur


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    # Some providers key collections by id instead of returning arrays.
    if isinstance(value, dict):
        return list(value.values())
    return []


def as_str(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value)


def as_optional_str(value: Any) -> Optional[str]:
    s = as_str(value)
    return s or None


def as_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default
