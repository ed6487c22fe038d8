"""Interpolation splicing for double-quoted string literals.

An ``InterpolatedString`` alternates literal segments and ``#{...}`` slots.
Literal segments are escaped just enough to survive the trip back through
the parser; each slot's statements are rendered by a caller-supplied
function into their own buffer and wrapped in ``#{`` and ``}``.

Example:
    >>> node = InterpolatedString(parts=(
    ...     String("op: "),
    ...     EmbeddedStatements(Statements((LocalVariableRead("op"),))),
    ... ))
    >>> splice(node, lambda s: "op")
    '"op: #{op}"'

"""

from collections.abc import Callable, Iterator

from kureha.errors import UnsupportedConstructError
from kureha.literals import escape_double_quoted
from kureha.nodes import EmbeddedStatements, InterpolatedString, Statements, String

type EmbeddedRenderer = Callable[[Statements | None], str]


def _coalesce(parts: tuple[String | EmbeddedStatements, ...]) -> Iterator[str | EmbeddedStatements]:
    """Merge runs of adjacent literal segments into single strings."""
    pending: list[str] = []
    for part in parts:
        match part:
            case String(content=content):
                pending.append(content)
            case EmbeddedStatements():
                if pending:
                    yield "".join(pending)
                    pending.clear()
                yield part
            case _:
                raise UnsupportedConstructError(
                    type(part).__name__, "not allowed inside an interpolated string"
                )
    if pending:
        yield "".join(pending)


def splice(node: InterpolatedString, render_embedded: EmbeddedRenderer) -> str:
    """Render an interpolated string literal, quotes included.

    Args:
        node: The string to render
        render_embedded: Renders the statements of one ``#{...}`` slot and
            returns their text. Called once per slot, in order.

    Returns:
        The double-quoted literal.

    Raises:
        UnsupportedConstructError: If a part is neither a literal segment
            nor an embedded slot.

    """
    segments = list(_coalesce(node.parts))
    out = ['"']
    for index, segment in enumerate(segments):
        if isinstance(segment, str):
            # A segment is followed either by a slot's `#` or the closing quote
            following = "#" if index + 1 < len(segments) else '"'
            out.append(escape_double_quoted(segment, following))
        else:
            out.append("#{")
            out.append(render_embedded(segment.statements))
            out.append("}")
    out.append('"')
    return "".join(out)
