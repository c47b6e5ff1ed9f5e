"""Recursive merge of string-keyed data maps."""

from collections.abc import Mapping
from typing import Any


def deep_merge(src: Mapping[str, Any] | None, dst: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge ``dst`` over ``src`` and return a new dict.

    Keys found in only one side are copied over. When both sides hold a
    mapping under the same key the two mappings are merged recursively;
    any other conflict is won by ``dst``. Lists are replaced wholesale,
    never concatenated. Neither argument is mutated.

    Example:
        >>> deep_merge({"a": {"x": 1}, "l": [1, 2, 3]}, {"a": {"y": 2}, "l": [4, 5]})
        {'a': {'x': 1, 'y': 2}, 'l': [4, 5]}
    """
    result: dict[str, Any] = dict(src) if src else {}
    if not dst:
        return result

    for key, dst_value in dst.items():
        if key not in result:
            result[key] = dst_value
            continue

        src_value = result[key]
        if isinstance(src_value, Mapping) and isinstance(dst_value, Mapping):
            result[key] = deep_merge(src_value, dst_value)
        else:
            result[key] = dst_value

    return result


def copy_tree(value: Any) -> Any:
    """Copy the dict/list structure of ``value``, leaving leaf values shared.

    Used to hand callers data they can mutate without corrupting the
    copy held by a provider or a context.
    """
    if isinstance(value, Mapping):
        return {k: copy_tree(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_tree(v) for v in value]
    return value
