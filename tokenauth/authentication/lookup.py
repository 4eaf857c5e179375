from collections.abc import Mapping, Sequence
from typing import Any

type FieldChain = tuple[str, ...]


def parse_field_path(path: str) -> FieldChain:
    """
    Split a bracket field path into its keys.

    ``"profile[username]"`` -> ``("profile", "username")``
    """
    return tuple(path.replace("]", "").split("["))


def _is_container(value: Any) -> bool:
    if isinstance(value, str | bytes | bytearray):
        return False
    return isinstance(value, Mapping | Sequence)


def _get(obj: Any, key: str) -> tuple[bool, Any]:
    if isinstance(obj, Mapping):
        if key in obj:
            return True, obj[key]
        return False, None
    if not key.isdecimal():
        return False, None
    index = int(key)
    if index >= len(obj):
        return False, None
    return True, obj[index]


def lookup(obj: Any, chain: FieldChain) -> Any:
    """
    Walk ``chain`` through nested mappings and sequences.

    Returns the first leaf reached, even if keys remain. A missing root,
    a missing key or a chain ending on a container yields None.
    """
    if obj is None or not _is_container(obj):
        return None
    for key in chain:
        found, value = _get(obj, key)
        if not found or value is None:
            return None
        if not _is_container(value):
            return value
        obj = value
    return None
