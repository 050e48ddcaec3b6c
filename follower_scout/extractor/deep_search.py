# follower_scout/extractor/deep_search.py
"""
Depth-first search for a follower count inside parsed page state.

The structure may be arbitrarily nested and, when built in Python rather than
by ``json.loads``, self-referential. Containers are tracked by identity, and
an explicit stack of iterators replaces recursion so deep state blobs do not
hit the interpreter recursion limit.
"""
from __future__ import annotations

import re
from typing import Any, Iterator, List, Optional, Set, Tuple

from follower_scout.extractor.numbers import to_number

FOLLOWER_KEY_RE = re.compile(
    r"(followers?|follower_count|followerCount|follow_count|fan_count|fans|likes|subscribers|subscriber_count)",
    re.IGNORECASE,
)

#: smallest value accepted from a string under an unrelated key
MIN_LOOSE_VALUE = 10

_Item = Tuple[str, Any]


def _items(container: Any) -> Iterator[_Item]:
    if isinstance(container, dict):
        for key, value in container.items():
            yield str(key), value
    else:
        for index, value in enumerate(container):
            yield str(index), value


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def find_follower_count(state: Any) -> Optional[int]:
    """Return the first follower-like number in *state*, scanning keys in order.

    * a key matching :data:`FOLLOWER_KEY_RE` wins as soon as its value coerces;
    * nested containers are entered immediately (depth first);
    * a string under any other key counts only if it coerces to at least
      :data:`MIN_LOOSE_VALUE`.
    """
    if not _is_container(state):
        return None

    seen: Set[int] = {id(state)}
    stack: List[Iterator[_Item]] = [_items(state)]
    while stack:
        try:
            key, value = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue

        if value is None:
            continue

        if FOLLOWER_KEY_RE.search(key):
            number = to_number(value)
            if number is not None:
                return number

        if _is_container(value):
            if id(value) not in seen:
                seen.add(id(value))
                stack.append(_items(value))
        elif isinstance(value, str):
            number = to_number(value)
            if number is not None and number >= MIN_LOOSE_VALUE:
                return number

    return None


__all__ = ["FOLLOWER_KEY_RE", "MIN_LOOSE_VALUE", "find_follower_count"]
