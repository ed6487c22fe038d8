"""Protocols for Kureha.

Defines the contract for the external parser that turns Ruby source into
the parse tree Kureha renders. Kureha ships no parser of its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from kureha.nodes import Program


class SourceParser(Protocol):
    """Protocol for Ruby parsers used by ``Minifier``.

    Thread Safety:
        Implementations shared across threads must be stateless or use
        only local variables.

    """

    def parse(self, source: str, *, source_file: str | None = None) -> Program:
        """Parse Ruby source into a Program tree.

        Args:
            source: Complete Ruby source text
            source_file: Path the source came from, for error messages

        Returns:
            Program root node

        Raises:
            RubySyntaxError: If the source is not valid Ruby. The error is
                passed to the caller unchanged.
        """
        ...
