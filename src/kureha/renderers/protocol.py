"""SourceRenderer protocol: stable interface for tree renderers.

Any renderer that implements ``render(node) -> str`` conforms to this protocol.
The built-in ``RubyRenderer`` is the reference implementation.

Example:
    from kureha.renderers.protocol import SourceRenderer

    def minify_tree(renderer: SourceRenderer, program: Program) -> str:
        return renderer.render(program)

"""

from typing import Protocol

from kureha.nodes import Node


class SourceRenderer(Protocol):
    """Protocol for parse tree renderers.

    Implementations must accept a tree and return rendered source text.
    The built-in ``RubyRenderer`` conforms to this protocol.

    """

    def render(self, node: Node) -> str:
        """Render a parse tree to a string.

        Args:
            node: The tree to render, usually a Program.

        Returns:
            Rendered source text.

        """
        ...
