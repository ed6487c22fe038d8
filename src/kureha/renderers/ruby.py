"""Ruby renderer: parse tree to minimal Ruby source.

Renders a typed parse tree back to the shortest practical Ruby text that
re-parses to a program with the same behaviour. Everything is decided
during a single walk over the tree; the output is never re-scanned or
patched afterwards.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single RubyRenderer
instance and call render() concurrently without synchronization.

Decisions made per node:
- Separators between statements come from the separator state machine.
- Grouping parentheses come from the precedence table, comparing the
  operator of each operand with the operator it sits under.
- Spaces are emitted only where two tokens would otherwise fuse.
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from kureha.buffer import RenderBuffer
from kureha.config import RenderOptions, get_render_options
from kureha.errors import UnsupportedConstructError
from kureha.interpolation import splice
from kureha.literals import (
    encode_float,
    encode_integer,
    encode_string,
    encode_symbol,
    is_identifier,
    is_negative_number,
    label_for,
)
from kureha.nodes import (
    And,
    Array,
    AssocSplat,
    Begin,
    BlankLine,
    Block,
    BlockArgument,
    Break,
    Call,
    Case,
    ClassDef,
    Comment,
    ConstantPath,
    ConstantRead,
    ConstantWrite,
    Def,
    Else,
    FalseLiteral,
    Float,
    For,
    GlobalVariableRead,
    GlobalVariableWrite,
    Hash,
    If,
    InstanceVariableRead,
    InstanceVariableWrite,
    Integer,
    InterpolatedString,
    KeywordHash,
    LocalVariableRead,
    LocalVariableWrite,
    ModuleDef,
    Next,
    NilLiteral,
    Node,
    Not,
    OperatorWrite,
    Or,
    Pair,
    Parameters,
    Parentheses,
    Program,
    Range,
    Return,
    SelfLiteral,
    SingletonClass,
    Splat,
    Statements,
    String,
    Super,
    Symbol,
    TrueLiteral,
    Unless,
    Until,
    While,
    Yield,
)
from kureha.precedence import (
    ARGUMENT_PRECEDENCE,
    BINARY_OPERATOR_METHODS,
    MEMBER_ACCESS_PRECEDENCE,
    UNARY_OPERATORS,
    Side,
    needs_parens,
    needs_parens_at,
)
from kureha.separators import SEPARATOR_REQUIRED, SeparatorState, SeparatorStateMachine
from kureha.visitor import contains_block_construct, walk

logger = logging.getLogger(__name__)

# Receiverless calls whose single argument may follow without parentheses
OUTPUT_CALLS: frozenset[str] = frozenset(
    {"puts", "print", "p", "pp", "require", "require_relative"}
)

# `not` is a keyword, never a method name
_UNARY_METHODS: frozenset[str] = UNARY_OPERATORS - {"not"}
_BARE_WORD_ARGUMENTS = LocalVariableRead | InstanceVariableRead | GlobalVariableRead | ConstantRead
_QUOTES = "\"'"


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Encapsulates all state that changes during a single render() call.
    Created fresh for each render, ensuring thread safety when sharing
    RubyRenderer instances across threads.

    Attributes:
        options: Options in effect for this call
        locals: Local variable names visible in the current scope. A bare
            receiverless call whose name is in here must keep its ``()``.
        brace_blocks: Attach blocks with ``{}`` instead of ``do...end``,
            set where a loop header or a command argument would otherwise
            take the ``do``.
    """

    options: RenderOptions
    locals: set[str] = field(default_factory=set)
    brace_blocks: bool = False

    @property
    def separator(self) -> str:
        return self.options.separator


class RubyRenderer:
    """Render a Ruby parse tree to minimal source text.

    Usage:
        >>> renderer = RubyRenderer()
        >>> renderer.render(program)
        'def hello;puts"Hello, World!";end'

    Thread Safety:
        Instances hold only immutable options. Safe to share.
    """

    __slots__ = ("_options",)

    def __init__(self, options: RenderOptions | None = None) -> None:
        """Initialize renderer.

        Args:
            options: Render options. When None, the options active in the
                calling context are looked up on every render() call.
        """
        self._options = options

    def render(self, node: Node) -> str:
        """Render a tree to Ruby source.

        Args:
            node: Usually a Program. A Statements node or a single statement
                is rendered as if it were a whole file.

        Returns:
            Minified source with no trailing separator or whitespace.

        Raises:
            UnsupportedConstructError: If the tree contains a node kind the
                renderer has no rule for, or a node where it cannot appear.
                No partial output is produced.
        """
        options = self._options if self._options is not None else get_render_options()
        ctx = RenderContext(options=options)
        buf = RenderBuffer()

        match node:
            case Program(statements=statements):
                body = self._statements_of(statements)
            case Statements(body=body):
                pass
            case _:
                body = (node,)

        self._render_sequence(body, buf, ctx, root=True)
        logger.debug("Rendered %d top-level statements", len(body))
        return buf.build()

    # -- Statement sequences ---------------------------------------------------

    def _render_sequence(
        self, statements: Iterable[Node], buf: RenderBuffer, ctx: RenderContext, *, root: bool = False
    ) -> SeparatorState:
        """Render statements with separators between them.

        Returns:
            Final separator state, which tells the caller whether a closing
            keyword that follows needs a separator before it.
        """
        kept = [s for s in statements if self._is_kept(s, ctx)]
        if root:
            # Output never starts or ends with a blank line
            while kept and isinstance(kept[-1], BlankLine):
                kept.pop()
            while kept and isinstance(kept[0], BlankLine):
                kept.pop(0)

        machine = SeparatorStateMachine()
        last = len(kept) - 1
        for index, statement in enumerate(kept):
            if machine.separator_required:
                buf.append(ctx.separator)
            match statement:
                case Comment(text=text):
                    buf.append("#").append(text)
                    if not (root and index == last):
                        buf.append("\n")
                case BlankLine():
                    buf.append("\n")
                case _:
                    self._render_statement(statement, buf, ctx)
            machine.advance(statement)
        return machine.state

    def _render_clause(self, body: Node | None, buf: RenderBuffer, ctx: RenderContext) -> None:
        """Header separator, body, and the separator a closing keyword needs."""
        buf.append(ctx.separator)
        state = self._render_sequence(self._statements_of(body), buf, ctx)
        if SEPARATOR_REQUIRED[state]:
            buf.append(ctx.separator)

    def _render_statement(self, node: Node, buf: RenderBuffer, ctx: RenderContext) -> None:
        match node:
            case If() | Unless() if (inner := self._postfix_candidate(node, ctx)) is not None:
                keyword = "if" if isinstance(node, If) else "unless"
                self._render_statement(inner, buf, ctx)
                buf.append(" ").append(keyword)
                self._append_keyword_operand(self._text(node.predicate, ctx), buf, ctx)
            case Call() if self._is_output_call(node, ctx):
                argument = node.arguments[0]
                buf.append(node.name)
                self._append_keyword_operand(self._text(argument, ctx), buf, ctx)
            case _ if self._starts_with_brace(node):
                # A leading `{` would open a block, not a hash
                buf.append("(").append(self._text(node, ctx)).append(")")
            case _:
                self._render_node(node, buf, ctx)

    def _postfix_candidate(self, node: If | Unless, ctx: RenderContext) -> Node | None:
        """Return the single body statement if ``node`` can be written postfix."""
        if node.alternate is not None:
            return None
        kept = [s for s in self._statements_of(node.statements) if self._is_kept(s, ctx)]
        if len(kept) != 1 or isinstance(kept[0], Comment | BlankLine):
            return None
        inner = kept[0]
        if contains_block_construct(inner) or contains_block_construct(node.predicate):
            return None
        # The postfix body is parsed before the predicate, so a local the
        # predicate assigns would not be known to it yet
        if any(isinstance(n, LocalVariableWrite) for n in walk(node.predicate)):
            return None
        return inner

    def _is_output_call(self, call: Call, ctx: RenderContext) -> bool:
        if call.receiver is not None or call.block is not None or call.safe_navigation:
            return False
        if call.name not in OUTPUT_CALLS or call.name in ctx.locals:
            return False
        if len(call.arguments) != 1:
            return False
        return isinstance(call.arguments[0], String | InterpolatedString | _BARE_WORD_ARGUMENTS)

    # -- Node dispatch ---------------------------------------------------------

    def _render_node(self, node: Node, buf: RenderBuffer, ctx: RenderContext) -> None:
        """Render any expression or construct, without outer parentheses."""
        match node:
            # Definitions
            case Def():
                self._render_def(node, buf, ctx)
            case ClassDef():
                buf.append("class ").append(self._text(node.constant_path, ctx))
                if node.superclass is not None:
                    buf.append("<").append(self._member_operand(node.superclass, ctx))
                with self._scope(ctx):
                    self._render_clause(node.body, buf, ctx)
                buf.append("end")
            case SingletonClass():
                buf.append("class<<").append(self._member_operand(node.expression, ctx))
                with self._scope(ctx):
                    self._render_clause(node.body, buf, ctx)
                buf.append("end")
            case ModuleDef():
                buf.append("module ").append(self._text(node.constant_path, ctx))
                with self._scope(ctx):
                    self._render_clause(node.body, buf, ctx)
                buf.append("end")

            # Conditionals and loops
            case If():
                self._render_if(node, buf, ctx)
            case Unless():
                buf.append("unless")
                self._append_keyword_operand(self._text(node.predicate, ctx), buf, ctx)
                self._render_clause(node.statements, buf, ctx)
                self._render_else(node.alternate, buf, ctx)
                buf.append("end")
            case Case():
                self._render_case(node, buf, ctx)
            case While() | Until():
                keyword = "while" if isinstance(node, While) else "until"
                buf.append(keyword)
                with self._brace_blocks(ctx):
                    predicate = self._text(node.predicate, ctx)
                self._append_keyword_operand(predicate, buf, ctx)
                self._render_clause(node.statements, buf, ctx)
                buf.append("end")
            case For():
                buf.append("for ").append(self._target(node.index, ctx)).append(" in ")
                with self._brace_blocks(ctx):
                    buf.append(self._text(node.collection, ctx))
                self._render_clause(node.statements, buf, ctx)
                buf.append("end")
            case Begin():
                self._render_begin(node, buf, ctx)

            # Calls and operators
            case Call():
                self._render_call(node, buf, ctx)
            case And(left=left, right=right, keyword=keyword):
                self._render_logical(node, left, right, "and" if keyword else "&&", buf, ctx)
            case Or(left=left, right=right, keyword=keyword):
                self._render_logical(node, left, right, "or" if keyword else "||", buf, ctx)
            case Not(expression=expression):
                buf.append("not")
                operand = self._text(expression, ctx)
                if needs_parens(self._operator_of(expression), "not", "right"):
                    operand = f"({operand})"
                self._append_keyword_operand(operand, buf, ctx)

            # Jumps
            case Return(arguments=arguments):
                self._render_jump("return", arguments, buf, ctx)
            case Break(arguments=arguments):
                self._render_jump("break", arguments, buf, ctx)
            case Next(arguments=arguments):
                self._render_jump("next", arguments, buf, ctx)
            case Yield(arguments=arguments):
                buf.append("yield")
                if arguments:
                    buf.append("(").append(self._arguments(arguments, ctx)).append(")")
            case Super(arguments=arguments, block=block):
                buf.append("super")
                if arguments is not None:
                    buf.append("(").append(self._arguments(arguments, ctx, block)).append(")")
                elif isinstance(block, BlockArgument):
                    # Forwards the caller's arguments, replacing only the block
                    buf.append(" ").append(self._argument(block, ctx))
                if isinstance(block, Block):
                    self._render_block(block, buf, ctx)

            # Literals
            case Integer(value=value):
                buf.append(encode_integer(value))
            case Float(value=value):
                buf.append(encode_float(value))
            case TrueLiteral():
                buf.append("true")
            case FalseLiteral():
                buf.append("false")
            case NilLiteral():
                buf.append("nil")
            case SelfLiteral():
                buf.append("self")
            case Symbol(value=value):
                buf.append(encode_symbol(value))
            case String(content=content):
                buf.append(encode_string(content))
            case InterpolatedString():
                buf.append(splice(node, lambda statements: self._embedded(statements, ctx)))
            case Array(elements=elements):
                buf.append("[").append(self._arguments(elements, ctx)).append("]")
            case Hash(elements=elements):
                buf.append("{")
                buf.append_joined(",", (self._hash_element(e, ctx) for e in elements))
                buf.append("}")
            case Range():
                self._render_range(node, buf, ctx)
            case Parentheses(body=body):
                buf.append("(")
                self._render_sequence(self._statements_of(body), buf, ctx)
                buf.append(")")
            case Statements(body=body):
                self._render_sequence(body, buf, ctx)

            # Variables
            case LocalVariableRead(name=name) | InstanceVariableRead(name=name):
                buf.append(name)
            case GlobalVariableRead(name=name) | ConstantRead(name=name):
                buf.append(name)
            case LocalVariableWrite(name=name, value=value):
                ctx.locals.add(name)
                self._render_assignment(name, value, buf, ctx)
            case (
                InstanceVariableWrite(name=name, value=value)
                | GlobalVariableWrite(name=name, value=value)
                | ConstantWrite(name=name, value=value)
            ):
                self._render_assignment(name, value, buf, ctx)
            case ConstantPath(parent=parent, name=name):
                if parent is not None:
                    buf.append(self._member_operand(parent, ctx))
                buf.append("::").append(name)
            case OperatorWrite(target=target, operator=operator, value=value):
                if isinstance(target, LocalVariableRead):
                    ctx.locals.add(target.name)
                target_text = self._text(target, ctx)
                buf.append(target_text)
                if target_text[-1] in "?!":
                    buf.append(" ")
                buf.append(operator).append(self._operand(value, "=", "right", ctx))

            case _:
                kind = type(node).__name__
                logger.debug("No rendering rule for %s", kind)
                raise UnsupportedConstructError(kind, _misplaced_detail(node))

    def _text(self, node: Node, ctx: RenderContext) -> str:
        """Render ``node`` into a fresh buffer and return the text."""
        buf = RenderBuffer()
        self._render_node(node, buf, ctx)
        return buf.build()

    def _embedded(self, statements: Statements | None, ctx: RenderContext) -> str:
        buf = RenderBuffer()
        self._render_sequence(self._statements_of(statements), buf, ctx)
        return buf.build()

    # -- Definitions -----------------------------------------------------------

    def _render_def(self, node: Def, buf: RenderBuffer, ctx: RenderContext) -> None:
        buf.append("def ")
        if node.receiver is not None:
            receiver = self._text(node.receiver, ctx)
            if not isinstance(node.receiver, SelfLiteral | ConstantRead | _BARE_WORD_ARGUMENTS):
                receiver = f"({receiver})"
            buf.append(receiver).append(".")
        buf.append(node.name)
        with self._scope(ctx):
            if node.parameters is not None:
                parameters = self._parameters(node.parameters, ctx)
                if parameters:
                    buf.append("(").append(parameters).append(")")
            self._render_clause(node.body, buf, ctx)
        buf.append("end")

    def _parameters(self, params: Parameters, ctx: RenderContext) -> str:
        """Comma-separated parameter list, registering each name as a local."""
        parts: list[str] = []

        def declare(prefix: str, name: str | None) -> str:
            if name:
                ctx.locals.add(name)
            return prefix + (name or "")

        parts.extend(declare("", p.name) for p in params.requireds)
        for optional in params.optionals:
            ctx.locals.add(optional.name)
            value = self._argument(optional.value, ctx)
            gap = " " if value.startswith("~") else ""
            parts.append(f"{optional.name}={gap}{value}")
        if params.rest is not None:
            parts.append(declare("*", params.rest.name))
        parts.extend(declare("", p.name) for p in params.posts)
        for keyword in params.keywords:
            ctx.locals.add(keyword.name)
            label = f"{keyword.name}:"
            if keyword.value is None:
                parts.append(label)
            else:
                parts.append(_join_label(label, self._argument(keyword.value, ctx)))
        if params.keyword_rest is not None:
            parts.append(declare("**", params.keyword_rest.name))
        if params.block is not None:
            parts.append(declare("&", params.block.name))
        return ",".join(parts)

    # -- Conditionals ----------------------------------------------------------

    def _render_if(self, node: If, buf: RenderBuffer, ctx: RenderContext) -> None:
        keyword = "if"
        current: If = node
        while True:
            buf.append(keyword)
            self._append_keyword_operand(self._text(current.predicate, ctx), buf, ctx)
            self._render_clause(current.statements, buf, ctx)
            if not isinstance(current.alternate, If):
                break
            current = current.alternate
            keyword = "elsif"
        self._render_else(current.alternate, buf, ctx)
        buf.append("end")

    def _render_else(self, alternate: Else | None, buf: RenderBuffer, ctx: RenderContext) -> None:
        if alternate is None:
            return
        if not isinstance(alternate, Else):
            raise UnsupportedConstructError(type(alternate).__name__, "expected an else branch")
        buf.append("else")
        self._render_clause(alternate.statements, buf, ctx)

    def _render_case(self, node: Case, buf: RenderBuffer, ctx: RenderContext) -> None:
        buf.append("case")
        if node.predicate is not None:
            self._append_keyword_operand(self._text(node.predicate, ctx), buf, ctx)
        buf.append(ctx.separator)
        for when in node.conditions:
            buf.append("when")
            self._append_keyword_operand(self._arguments(when.conditions, ctx), buf, ctx)
            self._render_clause(when.statements, buf, ctx)
        self._render_else(node.alternate, buf, ctx)
        buf.append("end")

    def _render_begin(self, node: Begin, buf: RenderBuffer, ctx: RenderContext) -> None:
        buf.append("begin")
        self._render_clause(node.statements, buf, ctx)
        for rescue in node.rescue_clauses:
            buf.append("rescue")
            if rescue.exceptions:
                buf.append(" ").append(self._arguments(rescue.exceptions, ctx))
            if rescue.reference is not None:
                ctx.locals.add(rescue.reference)
                buf.append("=>").append(rescue.reference)
            self._render_clause(rescue.statements, buf, ctx)
        self._render_else(node.else_clause, buf, ctx)
        if node.ensure_clause is not None:
            buf.append("ensure")
            self._render_clause(node.ensure_clause.statements, buf, ctx)
        buf.append("end")

    # -- Calls -----------------------------------------------------------------

    def _render_call(self, call: Call, buf: RenderBuffer, ctx: RenderContext) -> None:
        if _is_unary(call):
            assert call.receiver is not None
            symbol = call.name.removesuffix("@")
            operand = self._operand(call.receiver, call.name, "right", ctx)
            if symbol in "+-" and operand[:1].isdigit() and _binds_to_sign(call.receiver):
                # `-2.abs` lexes as the literal -2 receiving `.abs`
                operand = f"({operand})"
            buf.append(symbol)
            if symbol == "!" and operand[0] in "~=":
                buf.append(" ")
            buf.append(operand)
            return

        if _is_infix(call):
            assert call.receiver is not None
            left = self._operand(call.receiver, call.name, "left", ctx)
            right = self._operand(call.arguments[0], call.name, "right", ctx)
            buf.append(_join_infix(call.receiver, left, call.name, right))
            return

        if _is_index_assign(call):
            assert call.receiver is not None
            *keys, value = call.arguments
            buf.append(self._member_operand(call.receiver, ctx))
            buf.append("[").append(self._arguments(keys, ctx)).append("]")
            self._append_assigned_value(value, buf, ctx)
            return

        if _is_attribute_assign(call):
            assert call.receiver is not None
            buf.append(self._member_operand(call.receiver, ctx))
            buf.append("&." if call.safe_navigation else ".").append(call.name.removesuffix("="))
            self._append_assigned_value(call.arguments[0], buf, ctx)
            return

        if _is_index(call):
            assert call.receiver is not None
            buf.append(self._member_operand(call.receiver, ctx))
            buf.append("[").append(self._arguments(call.arguments, ctx, call.block)).append("]")
            return

        if call.receiver is not None:
            buf.append(self._member_operand(call.receiver, ctx))
            buf.append("&." if call.safe_navigation else ".")
        buf.append(call.name)

        block_argument = call.block if isinstance(call.block, BlockArgument) else None
        if call.arguments or block_argument is not None:
            arguments = self._arguments(call.arguments, ctx, block_argument)
            buf.append("(").append(arguments).append(")")
        elif call.receiver is None and (call.name in ctx.locals or call.name[:1].isupper()):
            # Without parentheses this would read as a variable or constant
            buf.append("()")

        if isinstance(call.block, Block):
            self._render_block(call.block, buf, ctx)

    def _render_block(self, block: Block, buf: RenderBuffer, ctx: RenderContext) -> None:
        with self._scope(ctx, inherit=True):
            params = ""
            if block.parameters is not None:
                params = self._parameters(block.parameters, ctx)
            if ctx.brace_blocks:
                buf.append("{")
                if params:
                    buf.append("|").append(params).append("|")
                self._render_sequence(self._statements_of(block.body), buf, ctx)
                buf.append("}")
                return
            buf.append(" do")
            if params:
                if ctx.options.space_after_keywords:
                    buf.append(" ")
                buf.append("|").append(params).append("|")
            with self._brace_blocks(ctx, enabled=False):
                self._render_clause(block.body, buf, ctx)
            buf.append("end")

    def _arguments(
        self,
        arguments: Iterable[Node],
        ctx: RenderContext,
        block: Block | BlockArgument | None = None,
    ) -> str:
        parts = [self._argument(argument, ctx) for argument in arguments]
        if isinstance(block, BlockArgument):
            parts.append(self._argument(block, ctx))
        return ",".join(parts)

    def _argument(self, node: Node, ctx: RenderContext) -> str:
        """Render one element of an argument list, array or ``when`` list."""
        match node:
            case Splat(expression=expression):
                return "*" + ("" if expression is None else self._member_operand(expression, ctx))
            case BlockArgument(expression=expression):
                return "&" + ("" if expression is None else self._member_operand(expression, ctx))
            case AssocSplat():
                return self._hash_element(node, ctx)
            case KeywordHash(elements=elements):
                return ",".join(self._hash_element(e, ctx) for e in elements)
            case _:
                text = self._text(node, ctx)
                if needs_parens_at(self._operator_of(node), ARGUMENT_PRECEDENCE):
                    return f"({text})"
                return text

    def _hash_element(self, node: Node, ctx: RenderContext) -> str:
        match node:
            case Pair(key=Symbol(value=name), value=value) if (label := label_for(name)):
                return _join_label(label, self._argument(value, ctx))
            case Pair(key=key, value=value):
                key_text = self._argument(key, ctx)
                return _join_infix(key, key_text, "=>", self._argument(value, ctx))
            case AssocSplat(value=value):
                return "**" + ("" if value is None else self._member_operand(value, ctx))
            case _:
                raise UnsupportedConstructError(type(node).__name__, "expected a hash element")

    # -- Operators -------------------------------------------------------------

    def _render_logical(
        self,
        node: Node,
        left: Node,
        right: Node,
        operator: str,
        buf: RenderBuffer,
        ctx: RenderContext,
    ) -> None:
        left_text = self._operand(left, operator, "left", ctx)
        right_text = self._operand(right, operator, "right", ctx)
        if operator in ("and", "or"):
            buf.append(left_text).append(f" {operator} ").append(right_text)
        else:
            buf.append(_join_infix(left, left_text, operator, right_text))

    def _render_range(self, node: Range, buf: RenderBuffer, ctx: RenderContext) -> None:
        operator = "..." if node.exclusive else ".."
        left = "" if node.left is None else self._operand(node.left, operator, "left", ctx)
        right = "" if node.right is None else self._operand(node.right, operator, "right", ctx)
        if node.left is None or node.right is None:
            # Open ranges are always grouped so nothing after them is read
            # as their missing end
            buf.append("(").append(left).append(operator).append(right).append(")")
        else:
            buf.append(left).append(operator).append(right)

    def _render_assignment(self, name: str, value: Node, buf: RenderBuffer, ctx: RenderContext) -> None:
        buf.append(name)
        self._append_assigned_value(value, buf, ctx)

    def _append_assigned_value(self, value: Node, buf: RenderBuffer, ctx: RenderContext) -> None:
        text = self._operand(value, "=", "right", ctx)
        # `=~` is the match operator
        buf.append("= " if text[:1] == "~" else "=").append(text)

    def _render_jump(
        self, keyword: str, arguments: tuple[Node, ...], buf: RenderBuffer, ctx: RenderContext
    ) -> None:
        buf.append(keyword)
        if arguments:
            with self._brace_blocks(ctx):
                text = self._arguments(arguments, ctx)
            self._append_keyword_operand(text, buf, ctx)

    def _operand(self, node: Node, parent: str, side: Side, ctx: RenderContext) -> str:
        text = self._text(node, ctx)
        if needs_parens(self._operator_of(node), parent, side):
            return f"({text})"
        return text

    def _member_operand(self, node: Node, ctx: RenderContext) -> str:
        """Render the left side of ``.name``, ``[index]`` or ``::Name``."""
        text = self._text(node, ctx)
        if needs_parens_at(self._operator_of(node), MEMBER_ACCESS_PRECEDENCE):
            return f"({text})"
        return text

    def _operator_of(self, node: Node) -> str | None:
        """Operator symbol ``node`` is an application of, or None."""
        match node:
            case Call() if _is_infix(node) or _is_unary(node):
                return node.name
            case Call() if _is_index_assign(node) or _is_attribute_assign(node):
                return "="
            case And(keyword=keyword):
                return "and" if keyword else "&&"
            case Or(keyword=keyword):
                return "or" if keyword else "||"
            case Not():
                return "not"
            case Range(left=left, right=right, exclusive=exclusive):
                if left is None or right is None:
                    return None
                return "..." if exclusive else ".."
            case (
                LocalVariableWrite()
                | InstanceVariableWrite()
                | GlobalVariableWrite()
                | ConstantWrite()
                | OperatorWrite()
            ):
                return "="
            case Integer(value=value) | Float(value=value) if is_negative_number(value):
                return "-@"
            case _:
                return None

    # -- Helpers ---------------------------------------------------------------

    def _append_keyword_operand(self, text: str, buf: RenderBuffer, ctx: RenderContext) -> None:
        """Append ``text`` after a keyword or bare call name.

        The space is only optional before a quote; elsewhere the two would
        fuse into one token.
        """
        if text[:1] not in _QUOTES or ctx.options.space_after_keywords:
            buf.append(" ")
        buf.append(text)

    def _target(self, node: Node, ctx: RenderContext) -> str:
        match node:
            case LocalVariableRead(name=name) | LocalVariableWrite(name=name):
                ctx.locals.add(name)
                return name
            case InstanceVariableRead(name=name) | GlobalVariableRead(name=name):
                return name
            case _:
                raise UnsupportedConstructError(type(node).__name__, "expected a loop variable")

    def _starts_with_brace(self, node: Node) -> bool:
        """True if the text of ``node`` would begin with a hash literal."""
        current: Node | None = node
        while current is not None:
            match current:
                case Hash():
                    return True
                case Call(receiver=receiver) if receiver is not None and not _is_unary(current):
                    current = receiver
                case And(left=left) | Or(left=left):
                    current = left
                case Range(left=left):
                    current = left
                case OperatorWrite(target=target):
                    current = target
                case _:
                    return False
        return False

    @staticmethod
    def _is_kept(node: Node, ctx: RenderContext) -> bool:
        match node:
            case Comment():
                return not ctx.options.strip_comments
            case BlankLine():
                return not ctx.options.strip_blank_lines
            case _:
                return True

    @staticmethod
    def _statements_of(body: Node | None) -> tuple[Node, ...]:
        match body:
            case None:
                return ()
            case Statements(body=statements):
                return statements
            case _:
                return (body,)

    @contextmanager
    def _scope(self, ctx: RenderContext, *, inherit: bool = False) -> Iterator[None]:
        """Enter a local variable scope; blocks see the enclosing locals."""
        outer = ctx.locals
        ctx.locals = set(outer) if inherit else set()
        try:
            yield
        finally:
            ctx.locals = outer

    @contextmanager
    def _brace_blocks(self, ctx: RenderContext, *, enabled: bool = True) -> Iterator[None]:
        outer = ctx.brace_blocks
        ctx.brace_blocks = enabled
        try:
            yield
        finally:
            ctx.brace_blocks = outer


# -- Call shape predicates -----------------------------------------------------


def _is_unary(call: Call) -> bool:
    return (
        call.receiver is not None
        and call.name in _UNARY_METHODS
        and not call.arguments
        and call.block is None
        and not call.safe_navigation
    )


def _is_infix(call: Call) -> bool:
    return (
        call.receiver is not None
        and call.name in BINARY_OPERATOR_METHODS
        and len(call.arguments) == 1
        and not isinstance(call.arguments[0], Splat | BlockArgument | KeywordHash | AssocSplat)
        and call.block is None
        and not call.safe_navigation
    )


def _is_index(call: Call) -> bool:
    return (
        call.receiver is not None
        and call.name == "[]"
        and not isinstance(call.block, Block)
        and not call.safe_navigation
    )


def _is_index_assign(call: Call) -> bool:
    return (
        call.receiver is not None
        and call.name == "[]="
        and len(call.arguments) >= 1
        and call.block is None
        and not call.safe_navigation
    )


def _is_attribute_assign(call: Call) -> bool:
    return (
        call.receiver is not None
        and call.name.endswith("=")
        and is_identifier(call.name[:-1])
        and len(call.arguments) == 1
        and not isinstance(call.arguments[0], Splat | BlockArgument | KeywordHash | AssocSplat)
        and call.block is None
    )


def _binds_to_sign(operand: Node) -> bool:
    """True if a sign written before ``operand`` would change what it applies to.

    A sign directly before a digit becomes part of the numeric literal, so
    anything applied to that literal afterwards sees the signed value.
    Ruby special-cases ``-2**2`` as ``-(2**2)``, so a power whose base is
    the literal itself is safe.
    """
    match operand:
        case Integer() | Float():
            return False
        case Call(receiver=Integer() | Float(), name="**") if _is_infix(operand):
            return False
        case _:
            return True


def _join_infix(left_node: Node, left: str, operator: str, right: str) -> str:
    """Join two operands around an operator, spacing only to avoid fusing.

    ``a?==b`` and ``:a==b`` would both lex the ``=`` into the left token.
    """
    last = left[-1:]
    fuses = last in ("?", "!") or (
        isinstance(left_node, Symbol) and (operator[0] == "=" or not (last.isalnum() or last in '_"'))
    )
    return f"{left} {operator}{right}" if fuses else f"{left}{operator}{right}"


def _join_label(label: str, value: str) -> str:
    # `a::b` would read as a scope lookup
    return f"{label} {value}" if value[:1] == ":" else f"{label}{value}"


def _misplaced_detail(node: object) -> str | None:
    match node:
        case Program():
            return "a program cannot be nested"
        case Comment() | BlankLine():
            return "trivia outside a statement sequence"
        case Pair() | AssocSplat() | KeywordHash() | Splat() | BlockArgument():
            return "only valid inside an argument list or literal"
        case Node():
            return None
        case _:
            return "not a parse tree node"
