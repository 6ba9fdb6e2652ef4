"""Deterministic cache key derivation."""

from collections.abc import Iterable, Mapping
from urllib.parse import quote

from spoonacular_proxy.domain.operations import KEY_SPECS, KeySpec

KEY_TAG_SEPARATOR = ":"


def derive_key(operation: str, params: Mapping[str, object]) -> str:
    """Build the cache key for an operation and its parameters.

    Free-text fields are lower-cased, multi-valued fields are sorted and
    optional fields that were not supplied are left out, so equivalent
    requests always map to the same key.

    The key is ``<tag>:<part>:<part>...``. Every value is percent-encoded,
    so neither the separator nor ``=`` or ``,`` can appear inside a part and
    two different requests never share a key.
    """
    spec = KEY_SPECS.get(operation) or _generic_spec(operation, params)
    parts: list[str] = []
    for name in spec.required:
        parts.append(_normalize(spec, name, params.get(name)))
    for name in spec.optional:
        value = params.get(name)
        if _is_absent(value):
            continue
        parts.append(f"{name}={_normalize(spec, name, value)}")
    return KEY_TAG_SEPARATOR.join([spec.prefix, *parts])


def key_tag(key: str) -> str:
    """Return the operation tag a cache key starts with."""
    return key.partition(KEY_TAG_SEPARATOR)[0]


def _generic_spec(operation: str, params: Mapping[str, object]) -> KeySpec:
    return KeySpec(_encode(operation), optional=tuple(sorted(params)))


def _is_absent(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str | list | tuple | set | frozenset):
        return len(value) == 0
    return False


def _normalize(spec: KeySpec, name: str, value: object) -> str:
    if value is None:
        return ""
    if name in spec.multi_valued:
        return ",".join(_encode(item) for item in normalize_multi(value))
    text = _to_text(value)
    if name in spec.free_text:
        text = text.strip().lower()
    return _encode(text)


def _encode(text: str) -> str:
    return quote(text, safe="")


def normalize_multi(value: object) -> list[str]:
    """Return the distinct items of a multi-valued parameter in stable order."""
    if isinstance(value, str):
        items: Iterable[object] = value.split(",")
    elif isinstance(value, Iterable):
        items = value
    else:
        items = [value]
    distinct = {_to_text(item).strip() for item in items}
    distinct.discard("")
    return sorted(distinct, key=_sort_key)


def _sort_key(item: str) -> tuple[int, int, str]:
    if item.isdecimal():
        return (0, int(item), item)
    return (1, 0, item)


def _to_text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
