"""Source location tracking for error messages and debugging.

Parse trees handed to Kureha come from an external parser. Nodes may carry
the position the parser saw them at; the renderer never needs it, but
errors raised on behalf of a node report it.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in the Ruby source it was parsed from.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(lineno=3, col_offset=5, source_file="app.rb")
        >>> str(loc)
        'app.rb:3:5'

    """

    lineno: int
    col_offset: int
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "app.rb:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"
