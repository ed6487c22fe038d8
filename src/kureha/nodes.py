"""Typed parse tree nodes for Kureha.

The tree is built by an external Ruby parser and handed to the renderer,
which only reads it. All nodes are frozen dataclasses with slots for:
- Immutability: a render can never alter its input, and trees are safe to
  share across threads
- Pattern matching: the renderer dispatches with ``match`` over this closed
  set of kinds
- Memory efficiency: __slots__ reduces memory footprint

Every node accepts an optional keyword-only ``location``.

Node Hierarchy:
Node (base)
├── Program, Statements                      (root and statement sequences)
├── Def, ClassDef, SingletonClass, ModuleDef (definitions)
├── If, Unless, Else, Case, When             (conditionals)
├── While, Until, For                        (loops)
├── Begin, Rescue, Ensure                    (exception handling)
├── Block, BlockArgument                     (blocks attached to calls)
├── Call, And, Or, Not                       (operator application and calls)
├── Return, Break, Next, Yield, Super        (jumps)
├── Integer, Float, TrueLiteral, ...         (literals)
├── LocalVariableRead, ConstantPath, ...     (variables)
├── Parameters, RequiredParameter, ...       (parameter declarations)
└── Comment, BlankLine                       (trivia)

"""

from dataclasses import dataclass, field

from kureha.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all parse tree nodes."""

    location: SourceLocation | None = field(default=None, kw_only=True, compare=False)


# =============================================================================
# Root and sequences
# =============================================================================


@dataclass(frozen=True, slots=True)
class Statements(Node):
    """Ordered statement sequence: a method body, a branch, a file."""

    body: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Program(Node):
    """Root node of a parsed file."""

    statements: Statements


# =============================================================================
# Parameters
# =============================================================================


@dataclass(frozen=True, slots=True)
class RequiredParameter(Node):
    """Ruby: def m(a)"""

    name: str


@dataclass(frozen=True, slots=True)
class OptionalParameter(Node):
    """Ruby: def m(a = 1)"""

    name: str
    value: Node


@dataclass(frozen=True, slots=True)
class RestParameter(Node):
    """Ruby: def m(*args) or anonymous def m(*)"""

    name: str | None = None


@dataclass(frozen=True, slots=True)
class KeywordParameter(Node):
    """Ruby: def m(key:) or def m(key: 1)"""

    name: str
    value: Node | None = None


@dataclass(frozen=True, slots=True)
class KeywordRestParameter(Node):
    """Ruby: def m(**opts) or anonymous def m(**)"""

    name: str | None = None


@dataclass(frozen=True, slots=True)
class BlockParameter(Node):
    """Ruby: def m(&block) or anonymous def m(&)"""

    name: str | None = None


@dataclass(frozen=True, slots=True)
class Parameters(Node):
    """Parameter list of a method or block.

    Fields are kept in the order Ruby requires them to be declared.

    """

    requireds: tuple[RequiredParameter, ...] = ()
    optionals: tuple[OptionalParameter, ...] = ()
    rest: RestParameter | None = None
    posts: tuple[RequiredParameter, ...] = ()
    keywords: tuple[KeywordParameter, ...] = ()
    keyword_rest: KeywordRestParameter | None = None
    block: BlockParameter | None = None


# =============================================================================
# Definitions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Def(Node):
    """Method definition.

    Ruby: def name(params) ... end, or def self.name ... end when a
    receiver is given.

    """

    name: str
    parameters: Parameters | None = None
    body: Node | None = None
    receiver: Node | None = None


@dataclass(frozen=True, slots=True)
class ClassDef(Node):
    """Ruby: class Name < Superclass ... end"""

    constant_path: Node
    superclass: Node | None = None
    body: Node | None = None


@dataclass(frozen=True, slots=True)
class SingletonClass(Node):
    """Ruby: class << self ... end"""

    expression: Node
    body: Node | None = None


@dataclass(frozen=True, slots=True)
class ModuleDef(Node):
    """Ruby: module Name ... end"""

    constant_path: Node
    body: Node | None = None


# =============================================================================
# Conditionals
# =============================================================================


@dataclass(frozen=True, slots=True)
class Else(Node):
    """The else branch of a conditional, case or begin."""

    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class If(Node):
    """Ruby: if predicate ... elsif ... else ... end

    A nested If as the alternate is an ``elsif`` branch.

    """

    predicate: Node
    statements: Statements | None = None
    alternate: "Else | If | None" = None


@dataclass(frozen=True, slots=True)
class Unless(Node):
    """Ruby: unless predicate ... else ... end"""

    predicate: Node
    statements: Statements | None = None
    alternate: Else | None = None


@dataclass(frozen=True, slots=True)
class When(Node):
    """Ruby: when a, b then ..."""

    conditions: tuple[Node, ...]
    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class Case(Node):
    """Ruby: case predicate when ... else ... end"""

    predicate: Node | None
    conditions: tuple[When, ...]
    alternate: Else | None = None


# =============================================================================
# Loops
# =============================================================================


@dataclass(frozen=True, slots=True)
class While(Node):
    """Ruby: while predicate ... end"""

    predicate: Node
    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class Until(Node):
    """Ruby: until predicate ... end"""

    predicate: Node
    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class For(Node):
    """Ruby: for index in collection ... end"""

    index: Node
    collection: Node
    statements: Statements | None = None


# =============================================================================
# Exception handling
# =============================================================================


@dataclass(frozen=True, slots=True)
class Rescue(Node):
    """Ruby: rescue ErrorA, ErrorB => reference"""

    exceptions: tuple[Node, ...] = ()
    reference: str | None = None
    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class Ensure(Node):
    """Ruby: ensure ..."""

    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class Begin(Node):
    """Ruby: begin ... rescue ... else ... ensure ... end"""

    statements: Statements | None = None
    rescue_clauses: tuple[Rescue, ...] = ()
    else_clause: Else | None = None
    ensure_clause: Ensure | None = None


# =============================================================================
# Blocks and calls
# =============================================================================


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Literal block attached to a call: do |params| ... end"""

    parameters: Parameters | None = None
    body: Node | None = None


@dataclass(frozen=True, slots=True)
class BlockArgument(Node):
    """Block passed as an argument: m(&blk), or anonymous m(&)"""

    expression: Node | None = None


@dataclass(frozen=True, slots=True)
class Call(Node):
    """Method call, including operator methods.

    Ruby parses ``a + b`` as a call of ``+`` on ``a`` with one argument,
    ``-a`` as a call of ``-@`` with none, and ``a[b]`` as a call of ``[]``.

    """

    receiver: Node | None
    name: str
    arguments: tuple[Node, ...] = ()
    block: Block | BlockArgument | None = None
    safe_navigation: bool = False


@dataclass(frozen=True, slots=True)
class And(Node):
    """Ruby: left && right, or left and right when keyword is set"""

    left: Node
    right: Node
    keyword: bool = False


@dataclass(frozen=True, slots=True)
class Or(Node):
    """Ruby: left || right, or left or right when keyword is set"""

    left: Node
    right: Node
    keyword: bool = False


@dataclass(frozen=True, slots=True)
class Not(Node):
    """Ruby: not expression"""

    expression: Node


# =============================================================================
# Jumps
# =============================================================================


@dataclass(frozen=True, slots=True)
class Return(Node):
    """Ruby: return, return a, return a, b"""

    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Break(Node):
    """Ruby: break, break value"""

    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Next(Node):
    """Ruby: next, next value"""

    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Yield(Node):
    """Ruby: yield, yield(a, b)"""

    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Super(Node):
    """Ruby: super (arguments=None forwards the caller's), super(a)"""

    arguments: tuple[Node, ...] | None = None
    block: Block | BlockArgument | None = None


# =============================================================================
# Literals
# =============================================================================


@dataclass(frozen=True, slots=True)
class Integer(Node):
    value: int


@dataclass(frozen=True, slots=True)
class Float(Node):
    value: float


@dataclass(frozen=True, slots=True)
class TrueLiteral(Node):
    pass


@dataclass(frozen=True, slots=True)
class FalseLiteral(Node):
    pass


@dataclass(frozen=True, slots=True)
class NilLiteral(Node):
    pass


@dataclass(frozen=True, slots=True)
class SelfLiteral(Node):
    pass


@dataclass(frozen=True, slots=True)
class Symbol(Node):
    """Symbol literal; ``value`` is the name without the leading colon."""

    value: str


@dataclass(frozen=True, slots=True)
class String(Node):
    """String literal; ``content`` is the unescaped value."""

    content: str


@dataclass(frozen=True, slots=True)
class EmbeddedStatements(Node):
    """Interpolation slot of a string: #{...}"""

    statements: Statements | None = None


@dataclass(frozen=True, slots=True)
class InterpolatedString(Node):
    """String literal with interpolation: "a #{b} c"

    Parts are ``String`` segments and ``EmbeddedStatements`` slots, in
    source order.

    """

    parts: tuple[String | EmbeddedStatements, ...]


@dataclass(frozen=True, slots=True)
class Splat(Node):
    """Ruby: *expression (anonymous * when expression is None)"""

    expression: Node | None = None


@dataclass(frozen=True, slots=True)
class Array(Node):
    elements: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Pair(Node):
    """Hash entry: key => value, or key: value for symbol keys"""

    key: Node
    value: Node


@dataclass(frozen=True, slots=True)
class AssocSplat(Node):
    """Ruby: **hash inside a hash or argument list"""

    value: Node | None = None


@dataclass(frozen=True, slots=True)
class Hash(Node):
    elements: tuple[Pair | AssocSplat, ...] = ()


@dataclass(frozen=True, slots=True)
class KeywordHash(Node):
    """Brace-less hash in an argument list: m(a: 1, b: 2)"""

    elements: tuple[Pair | AssocSplat, ...] = ()


@dataclass(frozen=True, slots=True)
class Range(Node):
    """Ruby: left..right or left...right; either end may be absent"""

    left: Node | None
    right: Node | None
    exclusive: bool = False


@dataclass(frozen=True, slots=True)
class Parentheses(Node):
    """Parentheses written in the source: (a + b)"""

    body: Node | None = None


# =============================================================================
# Variables
# =============================================================================


@dataclass(frozen=True, slots=True)
class LocalVariableRead(Node):
    name: str


@dataclass(frozen=True, slots=True)
class LocalVariableWrite(Node):
    name: str
    value: Node


@dataclass(frozen=True, slots=True)
class InstanceVariableRead(Node):
    """``name`` includes the leading @."""

    name: str


@dataclass(frozen=True, slots=True)
class InstanceVariableWrite(Node):
    name: str
    value: Node


@dataclass(frozen=True, slots=True)
class GlobalVariableRead(Node):
    """``name`` includes the leading $."""

    name: str


@dataclass(frozen=True, slots=True)
class GlobalVariableWrite(Node):
    name: str
    value: Node


@dataclass(frozen=True, slots=True)
class ConstantRead(Node):
    name: str


@dataclass(frozen=True, slots=True)
class ConstantWrite(Node):
    name: str
    value: Node


@dataclass(frozen=True, slots=True)
class ConstantPath(Node):
    """Ruby: Parent::Name, or ::Name when parent is None"""

    parent: Node | None
    name: str


@dataclass(frozen=True, slots=True)
class OperatorWrite(Node):
    """Compound assignment: target op= value, including ||= and &&=

    ``operator`` is the full assignment operator, e.g. "+=".

    """

    target: Node
    operator: str
    value: Node


# =============================================================================
# Trivia
# =============================================================================


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Line comment; ``text`` excludes the leading #."""

    text: str


@dataclass(frozen=True, slots=True)
class BlankLine(Node):
    """Blank line between statements, kept by parsers that preserve layout."""


# PEP 695 type aliases for node families
type Definition = Def | ClassDef | SingletonClass | ModuleDef
type Conditional = If | Unless | Case
type Loop = While | Until | For
type Trivia = Comment | BlankLine
