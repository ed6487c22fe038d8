"""Statement separator state machine.

Decides, between consecutive statements of one sequence, whether a
separator token has to be written. The decision is driven by the node kind
of the statement just rendered, looked up in fixed tables; nothing is
inferred from the text produced so far.

States:
    START              nothing rendered yet in this sequence
    AFTER_STATEMENT    a plain statement (call, assignment, literal...)
    AFTER_BLOCK_CLOSE  a construct closed by its own ``end``
    AFTER_LINE_BREAK   kept trivia that already ended the line

Ruby reads ``end foo`` as a syntax error and ``end.foo`` as a call on the
construct's value, so a closed construct is still followed by a separator.
Only a line break already written (a kept comment or blank line) makes the
next separator redundant.

Thread Safety:
    The tables are immutable. A machine instance belongs to one sequence of
    one render call.

"""

from enum import Enum
from types import MappingProxyType

from kureha.nodes import (
    BlankLine,
    Block,
    Begin,
    Call,
    Case,
    ClassDef,
    Comment,
    Def,
    For,
    If,
    ModuleDef,
    Node,
    SingletonClass,
    Super,
    Unless,
    Until,
    While,
)


class SeparatorState(Enum):
    START = "start"
    AFTER_STATEMENT = "after_statement"
    AFTER_BLOCK_CLOSE = "after_block_close"
    AFTER_LINE_BREAK = "after_line_break"


# Node kinds whose rendering ends with their own closing `end`
BLOCK_CLOSING_KINDS: frozenset[type[Node]] = frozenset(
    {Def, ClassDef, SingletonClass, ModuleDef, If, Unless, Case, While, Until, For, Begin}
)

# Trivia that renders its own terminating newline
LINE_BREAK_KINDS: frozenset[type[Node]] = frozenset({Comment, BlankLine})

# AFTER_BLOCK_CLOSE matches AFTER_STATEMENT here: `end` does not end the
# line for Ruby, so `end;def` keeps its separator
SEPARATOR_REQUIRED: MappingProxyType[SeparatorState, bool] = MappingProxyType(
    {
        SeparatorState.START: False,
        SeparatorState.AFTER_STATEMENT: True,
        SeparatorState.AFTER_BLOCK_CLOSE: True,
        SeparatorState.AFTER_LINE_BREAK: False,
    }
)


def classify(node: Node) -> SeparatorState:
    """State the machine enters after ``node`` has been rendered."""
    kind = type(node)
    if kind in LINE_BREAK_KINDS:
        return SeparatorState.AFTER_LINE_BREAK
    if kind in BLOCK_CLOSING_KINDS:
        return SeparatorState.AFTER_BLOCK_CLOSE
    if isinstance(node, Call | Super) and isinstance(node.block, Block):
        return SeparatorState.AFTER_BLOCK_CLOSE
    return SeparatorState.AFTER_STATEMENT


class SeparatorStateMachine:
    """Tracks separator needs across one statement sequence.

    Usage:
        >>> machine = SeparatorStateMachine()
        >>> for statement in statements:
        ...     if machine.separator_required:
        ...         buf.append(";")
        ...     render(statement)
        ...     machine.advance(statement)

    The same question asked after the last statement tells a caller whether
    the sequence must be closed with a separator before a following
    keyword such as ``end`` or ``else``.

    """

    __slots__ = ("_state",)

    def __init__(self) -> None:
        self._state = SeparatorState.START

    @property
    def state(self) -> SeparatorState:
        return self._state

    @property
    def separator_required(self) -> bool:
        return SEPARATOR_REQUIRED[self._state]

    def advance(self, node: Node) -> None:
        self._state = classify(node)
