"""
Kureha: Ruby Minifier for Python 3.12+

Renders a minimal, whitespace-stripped Ruby source string from an already
built Ruby parse tree. The output re-parses to a program with the same
behaviour. Typed tree, single-pass renderer, zero runtime dependencies.

Quick Start:
    >>> from kureha import render
    >>> from kureha.nodes import Call, Def, Program, Statements, String
    >>> tree = Program(Statements((
    ...     Def("hello", body=Statements((
    ...         Call(None, "puts", (String("Hello, World!"),)),
    ...     ))),
    ... )))
    >>> print(render(tree))
    def hello;puts"Hello, World!";end

    >>> # Or pair a parser with the renderer
    >>> from kureha import Minifier
    >>> minifier = Minifier(my_parser)
    >>> minifier("def hello\\n  puts 'Hello, World!'\\nend\\n")

Options:
    >>> from kureha import RenderOptions
    >>> render(tree, RenderOptions(insert_separators=False))
"""

from collections.abc import Iterable

from kureha.buffer import RenderBuffer
from kureha.config import (
    RenderOptions,
    get_render_options,
    render_options_context,
    reset_render_options,
    set_render_options,
)
from kureha.errors import KurehaError, RubySyntaxError, UnsupportedConstructError
from kureha.location import SourceLocation
from kureha.nodes import Node, Program
from kureha.precedence import OPERATORS, OperatorDescriptor, needs_parens
from kureha.protocols import SourceParser
from kureha.renderers.protocol import SourceRenderer
from kureha.renderers.ruby import RubyRenderer
from kureha.serialization import from_dict, from_json, to_dict, to_json
from kureha.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def render(tree: Node, options: RenderOptions | None = None) -> str:
    """Render a parse tree to minified Ruby source.

    Args:
        tree: Parse tree root, usually a Program
        options: Render options (uses the context's active options if None)

    Returns:
        Minified Ruby source

    Raises:
        UnsupportedConstructError: If the tree holds a node kind with no
            rendering rule

    Example:
        >>> render(tree)
        'def hello;puts"Hello, World!";end'
    """
    return RubyRenderer(options).render(tree)


class Minifier:
    """Ruby minifier combining an external parser and the renderer.

    Usage:
        >>> minifier = Minifier(parser)
        >>> minifier.minify("x = 1 + 2 * 3\\n")
        'x=1+2*3'

        >>> minifier.minify_many(["a = 1", "b = 2"])
        ['a=1', 'b=2']

    Thread Safety:
        Holds only the parser and an immutable renderer. Safe to share if
        the parser is.

    """

    __slots__ = ("_parser", "_renderer")

    def __init__(self, parser: SourceParser, options: RenderOptions | None = None) -> None:
        """Initialize minifier.

        Args:
            parser: Turns Ruby source into a Program tree
            options: Render options (uses the context's active options if None)
        """
        self._parser = parser
        self._renderer = RubyRenderer(options)

    def __call__(self, source: str) -> str:
        """Minify Ruby source in one call."""
        return self.minify(source)

    def minify(self, source: str, *, source_file: str | None = None) -> str:
        """Parse and render Ruby source.

        Args:
            source: Ruby source text
            source_file: Optional source file path for error messages

        Returns:
            Minified Ruby source

        Raises:
            RubySyntaxError: Raised by the parser; propagated unchanged
            UnsupportedConstructError: If the parsed tree holds a node kind
                with no rendering rule

        """
        program = self._parser.parse(source, source_file=source_file)
        result = self._renderer.render(program)
        logger.debug("Minified %d chars to %d chars", len(source), len(result))
        return result

    def minify_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[str]:
        """Minify multiple Ruby sources.

        Stops at the first failure; no results are returned for a batch
        that raised.

        Args:
            sources: Iterable of Ruby source strings
            source_file: Optional source file path for error messages (applies to all)

        Returns:
            List of minified sources, in input order

        Example:
            >>> minifier.minify_many(["a = 1", "b = 2"])
            ['a=1', 'b=2']
        """
        return [self.minify(source, source_file=source_file) for source in sources]


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "render",
    "Minifier",
    "RubyRenderer",
    # Protocols
    "SourceParser",
    "SourceRenderer",
    # Configuration
    "RenderOptions",
    "get_render_options",
    "set_render_options",
    "reset_render_options",
    "render_options_context",
    # Errors
    "KurehaError",
    "RubySyntaxError",
    "UnsupportedConstructError",
    # Tree
    "Node",
    "Program",
    "SourceLocation",
    # Precedence
    "OPERATORS",
    "OperatorDescriptor",
    "needs_parens",
    # Building blocks
    "RenderBuffer",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
]
