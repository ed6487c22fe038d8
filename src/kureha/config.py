"""Render options for Kureha, with ContextVar-based defaults.

``render()`` takes an explicit ``RenderOptions``. When none is passed, the
options active in the current context are used, so an application can set
them once per thread (or per task) without threading them through every
call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from kureha import render
    from kureha.config import RenderOptions, render_options_context

    render(tree, RenderOptions(insert_separators=False))

    with render_options_context(RenderOptions(space_after_keywords=True)):
        render(tree)

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Immutable render configuration.

    Every toggle is cosmetic: any combination yields a program that behaves
    the same as the input tree.

    Attributes:
        insert_separators: Separate statements with ``;``. When False a
            newline is used instead.
        strip_comments: Drop ``Comment`` nodes. When False they are kept,
            each followed by the newline that ends it.
        strip_blank_lines: Drop ``BlankLine`` nodes. When False each one
            renders as a newline.
        space_after_keywords: Emit the optional space after keyword-like
            tokens (``do |x|``, ``puts "x"``, ``return "x"``). Spaces the
            grammar requires are always emitted.

    """

    insert_separators: bool = True
    strip_comments: bool = True
    strip_blank_lines: bool = True
    space_after_keywords: bool = False

    @property
    def separator(self) -> str:
        """The statement separator token these options select."""
        return ";" if self.insert_separators else "\n"

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "RenderOptions":
        """Create RenderOptions from a mapping.

        Useful where options come from an external source (a CLI, a TOML
        file). Only keys that are RenderOptions fields are used; unknown
        keys are ignored.

        Args:
            config_dict: Mapping with option values keyed by field name.

        Returns:
            New RenderOptions instance.

        Example:
            >>> options = RenderOptions.from_dict({
            ...     "insert_separators": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> options.insert_separators
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: bool(v) for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: RenderOptions = RenderOptions()

_render_options: ContextVar[RenderOptions] = ContextVar(
    "render_options",
    default=_DEFAULT_OPTIONS,
)


def get_render_options() -> RenderOptions:
    """Get the render options active in the current context."""
    return _render_options.get()


def set_render_options(options: RenderOptions) -> None:
    """Set render options for the current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _render_options.set(options)


def reset_render_options() -> None:
    """Reset the current context to the default options."""
    _render_options.set(_DEFAULT_OPTIONS)


@contextmanager
def render_options_context(options: RenderOptions) -> Iterator[None]:
    """Context manager for temporary option changes.

    Args:
        options: RenderOptions to use within the context.

    Yields:
        None

    Example:
        >>> with render_options_context(RenderOptions(insert_separators=False)):
        ...     text = render(tree)
        >>> # Previous options restored here

    """
    previous = _render_options.get()
    _render_options.set(options)
    try:
        yield
    finally:
        _render_options.set(previous)


__all__ = [
    "RenderOptions",
    "get_render_options",
    "set_render_options",
    "reset_render_options",
    "render_options_context",
]
