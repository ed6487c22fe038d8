"""Literal encoding for the Ruby renderer.

Turns primitive literal values back into the shortest Ruby source text that
reads back as the same value: integers, floats, symbols, labels and string
bodies.

All functions are pure and safe to call from any thread.

"""

import math
import re

# Identifier rules follow Ruby's: a letter or underscore (any Unicode
# letter counts), then word characters.
_IDENTIFIER = r"[^\W\d]\w*"

_BARE_SYMBOL = re.compile(
    rf"""
    (?:{_IDENTIFIER}[?!=]?)             # :name, :name?, :name!, :name=
    | (?:@@?{_IDENTIFIER})              # :@ivar, :@@cvar
    | (?:\${_IDENTIFIER})               # :$global
    | (?:\[\]=?|\*\*|[-+]@?|[*/%~!^&|]  # operator method names
       |<=>|===?|=~|!=|!~|<<|>>|<=?|>=?)
    """,
    re.VERBOSE,
)
_LABEL = re.compile(_IDENTIFIER)

# Characters that must be escaped inside a double-quoted literal. Ruby stops
# reading a script at NUL, ^D and ^Z, and folds CR, so control characters
# other than newline and tab are always written as escapes.
_DOUBLE_QUOTED_ESCAPES = {"\\": "\\\\", '"': '\\"', "\r": "\\r"}
_INTERPOLATION_SIGILS = "{@$"


def encode_integer(value: int) -> str:
    return str(value)


def encode_float(value: float) -> str:
    """Shortest Ruby literal for a float.

    Example:
        >>> encode_float(1e-05)
        '1e-5'
        >>> encode_float(2.0)
        '2.0'
    """
    if math.isnan(value):
        return "Float::NAN"
    if math.isinf(value):
        return "Float::INFINITY" if value > 0 else "-Float::INFINITY"
    mantissa, _, exponent = repr(value).partition("e")
    if not exponent:
        return mantissa
    return f"{mantissa}e{int(exponent)}"


def is_negative_number(value: int | float) -> bool:
    """True when the literal's text starts with a minus sign."""
    if isinstance(value, float):
        return not math.isnan(value) and math.copysign(1.0, value) < 0
    return value < 0


def escape_double_quoted(text: str, following: str = '"') -> str:
    """Escape a string body for use between double quotes.

    Only the delimiter, the escape character, control characters and a ``#``
    that would otherwise open an interpolation are escaped; everything else
    is copied as-is.

    Args:
        text: Raw string content
        following: Character that will come right after ``text`` in the
            output. A trailing ``#`` needs escaping only if this starts an
            interpolation.

    """
    parts: list[str] = []
    last = len(text) - 1
    for index, ch in enumerate(text):
        if ch in _DOUBLE_QUOTED_ESCAPES:
            parts.append(_DOUBLE_QUOTED_ESCAPES[ch])
        elif ch == "#":
            nxt = text[index + 1] if index < last else following
            parts.append("\\#" if nxt and nxt in _INTERPOLATION_SIGILS else "#")
        elif (ch < " " and ch not in "\n\t") or ch == "\x7f":
            parts.append(f"\\x{ord(ch):02X}")
        else:
            parts.append(ch)
    return "".join(parts)


def _single_quotable(text: str) -> bool:
    return not any((ch < " " and ch not in "\n\t") or ch == "\x7f" for ch in text)


def encode_string(content: str) -> str:
    """Encode a plain string literal, picking the cheaper quote style.

    Double quotes win ties. Single quotes are only considered when the body
    has no control characters other than newline and tab, since single
    quotes offer no escape for them.

    Example:
        >>> encode_string("Hello, World!")
        '"Hello, World!"'
        >>> encode_string('say "hi"')
        '\\'say "hi"\\''
    """
    double = f'"{escape_double_quoted(content)}"'
    if not _single_quotable(content):
        return double
    single = "'" + content.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return single if len(single) < len(double) else double


def encode_symbol(value: str) -> str:
    """Encode a symbol literal: ``:name`` when bare, ``:"..."`` otherwise."""
    if is_bare_symbol(value):
        return f":{value}"
    return f':"{escape_double_quoted(value)}"'


def is_bare_symbol(value: str) -> bool:
    return _BARE_SYMBOL.fullmatch(value) is not None


def label_for(value: str) -> str | None:
    """Return ``name:`` if a symbol key can be written as a hash label."""
    if _LABEL.fullmatch(value):
        return f"{value}:"
    return None


def is_identifier(name: str) -> bool:
    return _LABEL.fullmatch(name) is not None
