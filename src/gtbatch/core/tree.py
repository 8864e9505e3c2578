"""Depth-first traversal of the nested lists returned by the translate endpoints.

The endpoints reply with JSON arrays nested to a depth that changes with the
batch size and language pair. Only the primitive leaves carry text, so the
reply is reduced to the ordered sequence of its leaves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Union

logger = logging.getLogger(__name__)

Leaf = Union[str, int, float, bool, None]
RawReply = Union[Leaf, list["RawReply"]]

_PRIMITIVES = (str, int, float, bool, type(None))
_EXHAUSTED = object()


def is_leaf(node: object) -> bool:
    return isinstance(node, _PRIMITIVES)


def iter_leaves(tree: RawReply) -> Iterator[Leaf]:
    """Yield every primitive leaf of ``tree``, depth-first and left to right.

    Lists are descended into and never yielded themselves. A primitive passed
    as the root is its own single leaf. An explicit stack is used so that
    arbitrarily deep replies do not hit the recursion limit.
    """
    stack: list[Iterator[RawReply]] = [iter([tree])]
    while stack:
        node = next(stack[-1], _EXHAUSTED)
        if node is _EXHAUSTED:
            stack.pop()
        elif isinstance(node, list):
            stack.append(iter(node))
        elif is_leaf(node):
            yield node
        else:
            # JSON objects never carry translations
            logger.debug("Skipping non-list node of type %s", type(node).__name__)


def visit_leaves(tree: RawReply, visitor: Callable[[Leaf], bool | None]) -> None:
    """Call ``visitor`` on each leaf in order. A visitor returning False stops the walk."""
    for leaf in iter_leaves(tree):
        if visitor(leaf) is False:
            return


def string_leaves(tree: RawReply) -> list[str]:
    """Return only the string leaves of ``tree``, in traversal order."""
    return [leaf for leaf in iter_leaves(tree) if isinstance(leaf, str)]

