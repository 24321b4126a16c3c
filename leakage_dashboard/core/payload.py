"""
Payload extraction for tool-call parameter bags.
Finds the list-valued batch an event carries and reads its replace flag.
"""

from typing import Any, List, Mapping, Sequence

REPLACE_FLAG_KEYS = ("replace", "reset", "overwrite", "clear")


def to_list(value: Any) -> List[Any]:
    """Lists pass through, None becomes empty, anything else a one-item list."""
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if value is None:
        return []
    return [value]


def extract_list(params: Mapping[str, Any], key_aliases: Sequence[str]) -> List[Any]:
    """
    Return the batch under the first alias present in the bag.

    Alias order is precedence: a domain key ("findings") is listed before
    generic ones ("items", "data"). A present key with a None value still wins
    and yields an empty batch.
    """
    for key in key_aliases:
        if key in params:
            return to_list(params[key])
    return []


def is_replace_flag(params: Mapping[str, Any]) -> bool:
    """
    Decide full-replace semantics for one event.

    The first flag key carrying a non-None value decides; it must be boolean
    True or the string "true".
    """
    for key in REPLACE_FLAG_KEYS:
        candidate = params.get(key)
        if candidate is not None:
            return candidate is True or candidate == "true"
    return False
