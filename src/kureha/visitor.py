"""Tree traversal helpers for Kureha.

Children are discovered from the dataclass fields of each node, so new
node kinds are walked without touching this module.

Example, counting method definitions:

    defs = sum(1 for node in walk(program) if isinstance(node, Def))

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

from collections.abc import Iterator
from dataclasses import fields

from kureha.nodes import Block, Node
from kureha.separators import BLOCK_CLOSING_KINDS


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in field order."""
    for f in fields(node):
        if f.name == "location":
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth-first, pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def contains_block_construct(node: Node) -> bool:
    """True if ``node`` or any descendant renders its own ``end``.

    Blocks attached to calls count too, whether written ``do...end`` or
    with braces.
    """
    return any(
        type(current) in BLOCK_CLOSING_KINDS or isinstance(current, Block)
        for current in walk(node)
    )
