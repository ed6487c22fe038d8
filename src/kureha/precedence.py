"""Ruby operator precedence table and the grouping-parentheses rule.

Ranks follow the Ruby operator precedence table, highest first::

    !  ~  unary+
    **
    unary-
    *  /  %
    +  -
    <<  >>
    &
    |  ^
    >  >=  <  <=
    <=>  ==  ===  !=  =~  !~
    &&
    ||
    ..  ...
    =  +=  -=  ...    (assignment)
    not
    and  or

Binary operator *methods* (``+``, ``==``, ``<<``...) reach the renderer as
``Call`` nodes; ``&&``, ``||``, ``and``, ``or``, ``not``, ranges and
assignments have their own node kinds but share this one table.

The table is an immutable module constant, so concurrent renders read it
without coordination.

"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Literal


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


type Side = Literal["left", "right"]


@dataclass(frozen=True, slots=True)
class OperatorDescriptor:
    """Precedence facts about one operator symbol.

    Attributes:
        symbol: Operator as written (unary minus is "-@")
        precedence: Rank; higher binds tighter
        associativity: How same-rank chains group
        associative: Regrouping a same-symbol chain cannot change the
            result, so ``a && (b && c)`` may be written ``a&&b&&c``
        always_group: Never drop parentheses around a same-symbol child,
            even if ``associative`` is set

    """

    symbol: str
    precedence: int
    associativity: Associativity
    associative: bool = False
    always_group: bool = False


# Operators that take no receiver operand on their left
UNARY_OPERATORS: frozenset[str] = frozenset({"!", "~", "+@", "-@", "not"})

# Operator methods rendered infix when called with a receiver and one argument
BINARY_OPERATOR_METHODS: frozenset[str] = frozenset(
    {
        "**", "*", "/", "%", "+", "-", "<<", ">>", "&", "|", "^",
        ">", ">=", "<", "<=", "<=>", "==", "===", "!=", "=~", "!~",
    }
)

# Rank given to the receiver slot of `.name`, `[index]` and `::Name`
MEMBER_ACCESS_PRECEDENCE = 100

_L, _R, _N = Associativity.LEFT, Associativity.RIGHT, Associativity.NONE


def _table(*rows: OperatorDescriptor) -> MappingProxyType[str, OperatorDescriptor]:
    return MappingProxyType({row.symbol: row for row in rows})


OPERATORS: MappingProxyType[str, OperatorDescriptor] = _table(
    OperatorDescriptor("!", 19, _R),
    OperatorDescriptor("~", 19, _R),
    OperatorDescriptor("+@", 19, _R),
    OperatorDescriptor("**", 18, _R, always_group=True),
    OperatorDescriptor("-@", 17, _R),
    OperatorDescriptor("*", 16, _L, always_group=True),
    OperatorDescriptor("/", 16, _L, always_group=True),
    OperatorDescriptor("%", 16, _L, always_group=True),
    OperatorDescriptor("+", 15, _L),
    OperatorDescriptor("-", 15, _L),
    OperatorDescriptor("<<", 14, _L),
    OperatorDescriptor(">>", 14, _L),
    OperatorDescriptor("&", 13, _L),
    OperatorDescriptor("|", 12, _L),
    OperatorDescriptor("^", 12, _L),
    OperatorDescriptor(">", 11, _L),
    OperatorDescriptor(">=", 11, _L),
    OperatorDescriptor("<", 11, _L),
    OperatorDescriptor("<=", 11, _L),
    OperatorDescriptor("<=>", 10, _N),
    OperatorDescriptor("==", 10, _N),
    OperatorDescriptor("===", 10, _N),
    OperatorDescriptor("!=", 10, _N),
    OperatorDescriptor("=~", 10, _N),
    OperatorDescriptor("!~", 10, _N),
    OperatorDescriptor("&&", 9, _L, associative=True),
    OperatorDescriptor("||", 8, _L, associative=True),
    OperatorDescriptor("..", 7, _N),
    OperatorDescriptor("...", 7, _N),
    OperatorDescriptor("=", 4, _R),
    OperatorDescriptor("not", 3, _R),
    OperatorDescriptor("and", 1, _L, associative=True),
    OperatorDescriptor("or", 1, _L, associative=True),
)

# Lowest rank that may appear bare as a call argument, array element or
# hash value; `m(a and b)` does not parse.
ARGUMENT_PRECEDENCE = OPERATORS["="].precedence


def descriptor(symbol: str) -> OperatorDescriptor:
    """Look up the descriptor for an operator symbol.

    Raises:
        KeyError: If the symbol has no descriptor. Every operator node the
            renderer builds a context for must have one, so this indicates
            a bug rather than bad input.
    """
    try:
        return OPERATORS[symbol]
    except KeyError:
        msg = f"No precedence descriptor for operator {symbol!r}"
        raise KeyError(msg) from None


def needs_parens(child: str | None, parent: str, side: Side) -> bool:
    """Decide whether an operand must be wrapped in grouping parentheses.

    Args:
        child: Operator symbol of the operand, or None if the operand is not
            an operator application
        parent: Operator symbol of the application the operand sits in
        side: Which operand of ``parent`` the child is

    Returns:
        True if dropping the parentheses would change how the text parses.

    Example:
        >>> needs_parens("+", "*", "left")     # (a+b)*c
        True
        >>> needs_parens("*", "+", "right")    # a+b*c
        False
        >>> needs_parens("-", "-", "right")    # a-(b-c)
        True

    """
    if child is None:
        return False
    child_op = descriptor(child)
    parent_op = descriptor(parent)

    if child_op.precedence != parent_op.precedence:
        return child_op.precedence < parent_op.precedence

    if child == parent and child_op.associative and not child_op.always_group:
        return False
    match parent_op.associativity:
        case Associativity.LEFT:
            return side == "right"
        case Associativity.RIGHT:
            return side == "left"
        case Associativity.NONE:
            return True


def needs_parens_at(child: str | None, minimum: int) -> bool:
    """Decide grouping for an operand slot that has a rank but no operator.

    Used for slots such as the receiver of ``.name`` (binds tighter than
    any operator) or a call argument (binds looser than assignment only).
    """
    if child is None:
        return False
    return descriptor(child).precedence < minimum
