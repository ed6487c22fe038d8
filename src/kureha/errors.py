"""Exception classes for Kureha.

Two failure kinds reach a caller: the source could not be parsed by the
external parser (``RubySyntaxError``), or the renderer met a tree shape it
has no rule for (``UnsupportedConstructError``). Both derive from
``KurehaError`` and expose a ``kind`` discriminator.
"""

from __future__ import annotations

from typing import ClassVar, Literal

type ErrorKind = Literal["syntax", "unsupported_construct"]


class KurehaError(Exception):
    """Base exception for all Kureha errors.

    Catch this to handle every failure surfaced by ``render`` or
    ``Minifier.minify``; inspect ``kind`` to tell them apart.
    """

    kind: ClassVar[ErrorKind]


class RubySyntaxError(KurehaError):
    """The Ruby source could not be parsed.

    Raised by the external parser collaborator and propagated verbatim;
    the renderer itself never raises it.
    """

    kind = "syntax"

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize syntax error with optional location.

        Args:
            message: Parser's error description, kept as-is
            lineno: Line number where parsing failed (1-indexed)
            col_offset: Column offset where parsing failed (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class UnsupportedConstructError(KurehaError):
    """The renderer has no rendering rule for a node kind.

    Fatal: content is never dropped or approximated.
    """

    kind = "unsupported_construct"

    def __init__(self, node_kind: str, detail: str | None = None) -> None:
        """Initialize with the offending node kind.

        Args:
            node_kind: Name of the unrecognised node kind (e.g., "FlipFlop")
            detail: Optional context, such as where the node appeared
        """
        self.node_kind = node_kind
        self.detail = detail
        suffix = f" ({detail})" if detail else ""
        super().__init__(f"No rendering rule for node kind '{node_kind}'{suffix}")
