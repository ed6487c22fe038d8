"""RenderBuffer for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Sub-expressions are rendered into their own
buffer and merged into the parent as finished text.

Thread Safety:
RenderBuffer instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable


class RenderBuffer:
    """Append-only text accumulator for one render call.

    Usage:
        >>> buf = RenderBuffer()
        >>> _ = buf.append("def").append(" ").append("hello")
        >>> buf.build()
        'def hello'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> RenderBuffer:
        """Append a string (empty strings are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def append_joined(self, separator: str, strings: Iterable[str]) -> RenderBuffer:
        """Append strings with ``separator`` between them.

        Returns:
            self for method chaining
        """
        first = True
        for s in strings:
            if not first and separator:
                self._parts.append(separator)
            first = False
            if s:
                self._parts.append(s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)
