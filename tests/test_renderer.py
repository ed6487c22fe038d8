"""Tests for RubyRenderer."""

from __future__ import annotations

import pytest

from kureha import render
from kureha.config import RenderOptions
from kureha.nodes import (
    And,
    Array,
    AssocSplat,
    Begin,
    Block,
    BlockArgument,
    Call,
    Case,
    ClassDef,
    ConstantPath,
    ConstantRead,
    ConstantWrite,
    Def,
    Else,
    EmbeddedStatements,
    Ensure,
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
    RequiredParameter,
    Rescue,
    SelfLiteral,
    SingletonClass,
    Splat,
    Statements,
    String,
    Symbol,
    TrueLiteral,
    Unless,
    Until,
    When,
    While,
)


def _render(*statements: Node, **options: bool) -> str:
    return render(Program(Statements(statements)), RenderOptions(**options))


def _s(*statements: Node) -> Statements:
    return Statements(statements)


def _v(name: str) -> LocalVariableRead:
    return LocalVariableRead(name)


def _call(name: str, *args: Node) -> Call:
    return Call(None, name, args)


def _op(left: Node, operator: str, right: Node) -> Call:
    return Call(left, operator, (right,))


def _params(*names: str) -> Parameters:
    return Parameters(requireds=tuple(RequiredParameter(n) for n in names))


class TestReferenceExamples:
    """The canonical before/after pairs."""

    def test_arithmetic_precedence(self) -> None:
        tree = LocalVariableWrite("x", _op(Integer(1), "+", _op(Integer(2), "*", Integer(3))))
        assert _render(tree) == "x=1+2*3"

    def test_grouping_kept(self) -> None:
        tree = _op(_op(_v("a"), "+", _v("b")), "*", _op(_v("c"), "-", _v("d")))
        assert _render(tree) == "(a+b)*(c-d)"

    def test_method_definition(self) -> None:
        tree = Def("hello", body=_s(_call("puts", String("Hello, World!"))))
        assert _render(tree) == 'def hello;puts"Hello, World!";end'

    def test_do_block(self) -> None:
        block = Block(_params("item"), _s(_call("process", _v("item"))))
        tree = Call(_v("array"), "each", block=block)
        assert _render(tree) == "array.each do|item|;process(item);end"

    def test_interpolation_preserved(self) -> None:
        lookup = Call(_v("record"), "[]", (Symbol("operation"),))
        string = InterpolatedString(
            (String("Op: "), EmbeddedStatements(_s(lookup)), String("!"))
        )
        assert _render(_call("puts", string)) == 'puts"Op: #{record[:operation]}!"'


class TestStatementSequences:
    def test_semicolons_between_statements(self) -> None:
        a = LocalVariableWrite("a", Integer(1))
        b = LocalVariableWrite("b", Integer(2))
        assert _render(a, b) == "a=1;b=2"

    def test_newline_separators(self) -> None:
        a = LocalVariableWrite("a", Integer(1))
        b = LocalVariableWrite("b", Integer(2))
        assert _render(a, b, insert_separators=False) == "a=1\nb=2"

    def test_separator_after_end(self) -> None:
        assert _render(Def("a"), _call("a")) == "def a;end;a"

    def test_empty_program(self) -> None:
        assert _render() == ""

    def test_single_statement_without_program(self) -> None:
        assert render(LocalVariableWrite("a", Integer(1))) == "a=1"

    def test_statements_root(self) -> None:
        assert render(_s(_call("a"), _call("b"))) == "a;b"

    def test_newline_separators_in_blocks(self) -> None:
        tree = Def("hello", body=_s(_call("puts", String("hi"))))
        assert _render(tree, insert_separators=False) == 'def hello\nputs"hi"\nend'


class TestDefinitions:
    def test_parameters(self) -> None:
        tree = Def("add", _params("a", "b"), _s(_op(_v("a"), "+", _v("b"))))
        assert _render(tree) == "def add(a,b);a+b;end"

    def test_empty_parameters_drop_parentheses(self) -> None:
        assert _render(Def("a", Parameters())) == "def a;end"

    def test_singleton_method(self) -> None:
        assert _render(Def("build", receiver=SelfLiteral())) == "def self.build;end"

    def test_operator_method(self) -> None:
        assert _render(Def("==", _params("o"))) == "def ==(o);end"

    def test_class_with_superclass(self) -> None:
        tree = ClassDef(ConstantRead("Dog"), ConstantRead("Animal"), _s(Def("bark")))
        assert _render(tree) == "class Dog<Animal;def bark;end;end"

    def test_class_with_path(self) -> None:
        tree = ClassDef(ConstantPath(ConstantRead("A"), "B"))
        assert _render(tree) == "class A::B;end"

    def test_module(self) -> None:
        tree = ModuleDef(ConstantRead("Util"), _s(Def("x"), Def("y")))
        assert _render(tree) == "module Util;def x;end;def y;end;end"

    def test_singleton_class(self) -> None:
        tree = SingletonClass(SelfLiteral(), _s(Def("x")))
        assert _render(tree) == "class<<self;def x;end;end"


class TestConditionals:
    def test_if_else(self) -> None:
        tree = If(_v("a"), _s(_call("b"), _call("c")), Else(_s(_call("d"))))
        assert _render(tree) == "if a;b;c;else;d;end"

    def test_elsif_chain(self) -> None:
        tree = If(_v("a"), _s(_call("b")), If(_v("c"), _s(_call("d")), Else(_s(_call("e")))))
        assert _render(tree) == "if a;b;elsif c;d;else;e;end"

    def test_postfix_if(self) -> None:
        assert _render(If(_v("a"), _s(_call("b")))) == "b if a"

    def test_postfix_unless(self) -> None:
        assert _render(Unless(_v("a"), _s(_call("b")))) == "b unless a"

    def test_postfix_with_output_call(self) -> None:
        tree = If(_v("debug"), _s(_call("puts", String("x"))))
        assert _render(tree) == 'puts"x" if debug'

    def test_postfix_return(self) -> None:
        from kureha.nodes import Return

        assert _render(If(_v("done"), _s(Return()))) == "return if done"

    def test_two_statements_not_postfix(self) -> None:
        assert _render(If(_v("a"), _s(_call("b"), _call("c")))) == "if a;b;c;end"

    def test_block_in_body_not_postfix(self) -> None:
        each = Call(_v("xs"), "each", block=Block(body=_s(_call("f"))))
        assert _render(If(_v("a"), _s(each))) == "if a;xs.each do;f;end;end"

    def test_assignment_in_predicate_not_postfix(self) -> None:
        tree = If(LocalVariableWrite("m", _call("match")), _s(_call("use", _v("m"))))
        assert _render(tree) == "if m=match;use(m);end"

    def test_unless_else(self) -> None:
        tree = Unless(_v("a"), _s(_call("b")), Else(_s(_call("c"))))
        assert _render(tree) == "unless a;b;else;c;end"

    def test_empty_consequent(self) -> None:
        tree = If(_v("a"), None, Else(_s(_call("b"))))
        assert _render(tree) == "if a;else;b;end"

    def test_case(self) -> None:
        tree = Case(
            _v("x"),
            (
                When((Integer(1), Integer(2)), _s(_call("a"))),
                When((String("s"),), _s(_call("b"))),
            ),
            Else(_s(_call("c"))),
        )
        assert _render(tree) == 'case x;when 1,2;a;when"s";b;else;c;end'

    def test_case_without_subject(self) -> None:
        tree = Case(None, (When((_v("a"),), _s(_call("b"))),))
        assert _render(tree) == "case;when a;b;end"

    def test_case_splat_condition(self) -> None:
        tree = Case(_v("x"), (When((Splat(ConstantRead("LIST")),), _s(_call("a"))),))
        assert _render(tree) == "case x;when *LIST;a;end"


class TestLoops:
    def test_while(self) -> None:
        tree = While(
            _op(_v("i"), "<", Integer(10)),
            _s(OperatorWrite(_v("i"), "+=", Integer(1))),
        )
        assert _render(tree) == "while i<10;i+=1;end"

    def test_until(self) -> None:
        tree = Until(Call(_v("q"), "empty?"), _s(Call(_v("q"), "pop")))
        assert _render(tree) == "until q.empty?;q.pop;end"

    def test_for(self) -> None:
        tree = For(_v("i"), Range(Integer(1), Integer(3)), _s(_call("p", _v("i"))))
        assert _render(tree) == "for i in 1..3;p i;end"

    def test_block_in_loop_predicate_uses_braces(self) -> None:
        predicate = Call(
            _v("xs"), "any?", block=Block(_params("x"), _s(Call(_v("x"), "nil?")))
        )
        tree = While(predicate, _s(Call(_v("xs"), "shift")))
        assert _render(tree) == "while xs.any?{|x|x.nil?};xs.shift;end"

    def test_block_in_for_collection_uses_braces(self) -> None:
        collection = Call(_v("xs"), "select", block=Block(_params("x"), _s(_v("x"))))
        tree = For(_v("y"), collection, _s(_call("f", _v("y"))))
        assert _render(tree) == "for y in xs.select{|x|x};f(y);end"


class TestExceptions:
    def test_full_begin(self) -> None:
        tree = Begin(
            _s(_call("risky")),
            (
                Rescue(
                    (ConstantRead("IOError"), ConstantRead("SystemCallError")),
                    "e",
                    _s(_call("log", _v("e"))),
                ),
            ),
            Else(_s(_call("ok"))),
            Ensure(_s(_call("close"))),
        )
        assert _render(tree) == (
            "begin;risky;rescue IOError,SystemCallError=>e;log(e);else;ok;ensure;close;end"
        )

    def test_bare_rescue(self) -> None:
        assert _render(Begin(_s(_call("a")), (Rescue(),))) == "begin;a;rescue;end"

    def test_rescue_reference_only(self) -> None:
        tree = Begin(_s(_call("a")), (Rescue(reference="e", statements=_s(_call("p", _v("e")))),))
        assert _render(tree) == "begin;a;rescue=>e;p e;end"


class TestCalls:
    def test_receiver_without_arguments(self) -> None:
        assert _render(Call(_v("a"), "size")) == "a.size"

    def test_safe_navigation(self) -> None:
        assert _render(Call(_v("a"), "name", safe_navigation=True)) == "a&.name"

    def test_arguments(self) -> None:
        assert _render(_call("foo", Integer(1), String("x"))) == 'foo(1,"x")'

    def test_call_shadowed_by_local(self) -> None:
        assert _render(LocalVariableWrite("foo", Integer(1)), _call("foo")) == "foo=1;foo()"

    @pytest.mark.parametrize(
        ("argument", "expected"),
        [
            (String("x"), 'puts"x"'),
            (InterpolatedString((String("a"), EmbeddedStatements(_s(_v("b"))))), 'puts"a#{b}"'),
            (_v("x"), "puts x"),
            (InstanceVariableRead("@x"), "puts @x"),
            (GlobalVariableRead("$x"), "puts $x"),
            (ConstantRead("X"), "puts X"),
            (Integer(1), "puts(1)"),
        ],
    )
    def test_output_call_argument_kinds(self, argument: Node, expected: str) -> None:
        assert _render(_call("puts", argument)) == expected

    def test_output_call_in_postfix_conditional(self) -> None:
        tree = If(_v("a"), _s(_call("puts", String("x"))))
        assert _render(tree) == 'puts"x" if a'

    @pytest.mark.parametrize(
        ("receiver", "expected"),
        [
            (ConstantRead("Util"), "def Util.x;end"),
            (_v("obj"), "def obj.x;end"),
            (InstanceVariableRead("@o"), "def @o.x;end"),
            (Call(_v("a"), "b"), "def (a.b).x;end"),
        ],
    )
    def test_def_receiver_kinds(self, receiver: Node, expected: str) -> None:
        assert _render(Def("x", receiver=receiver)) == expected

    def test_capitalized_call(self) -> None:
        assert _render(_call("Integer", String("3"))) == 'Integer("3")'
        assert _render(_call("Foo")) == "Foo()"

    def test_splat_keywords_and_block_argument(self) -> None:
        tree = Call(
            None,
            "m",
            (
                Splat(_v("a")),
                KeywordHash((Pair(Symbol("k"), Integer(1)), AssocSplat(_v("o")))),
            ),
            BlockArgument(_v("b")),
        )
        assert _render(tree) == "m(*a,k:1,**o,&b)"

    def test_symbol_to_proc(self) -> None:
        tree = Call(_v("xs"), "map", block=BlockArgument(Symbol("to_s")))
        assert _render(tree) == "xs.map(&:to_s)"

    def test_anonymous_forwarding(self) -> None:
        tree = Call(None, "m", (Splat(),), BlockArgument())
        assert _render(tree) == "m(*,&)"

    def test_index(self) -> None:
        assert _render(Call(_v("h"), "[]", (Symbol("k"),))) == "h[:k]"

    def test_index_assign(self) -> None:
        assert _render(Call(_v("h"), "[]=", (Symbol("k"), Integer(1)))) == "h[:k]=1"

    def test_attribute_assign(self) -> None:
        assert _render(Call(SelfLiteral(), "name=", (String("x"),))) == 'self.name="x"'

    def test_output_call_bare_word(self) -> None:
        assert _render(_call("puts", _v("x"))) == "puts x"

    def test_output_call_two_arguments(self) -> None:
        assert _render(_call("puts", String("a"), String("b"))) == 'puts("a","b")'

    def test_output_call_expression_argument(self) -> None:
        assert _render(_call("puts", _op(_v("a"), "+", _v("b")))) == "puts(a+b)"

    def test_output_call_as_value_keeps_parentheses(self) -> None:
        tree = LocalVariableWrite("x", _call("p", String("s")))
        assert _render(tree) == 'x=p("s")'

    def test_require(self) -> None:
        assert _render(_call("require", String("json"))) == 'require"json"'

    def test_require_with_keyword_space(self) -> None:
        tree = _call("require", String("json"))
        assert _render(tree, space_after_keywords=True) == 'require "json"'

    def test_do_block_with_keyword_space(self) -> None:
        tree = Call(_v("xs"), "each", block=Block(_params("x"), _s(_call("f", _v("x")))))
        assert _render(tree, space_after_keywords=True) == "xs.each do |x|;f(x);end"

    def test_block_after_arguments(self) -> None:
        tree = Call(_v("xs"), "each_slice", (Integer(2),), Block(_params("a", "b")))
        assert _render(tree) == "xs.each_slice(2) do|a,b|;end"

    def test_chained_call_on_block(self) -> None:
        mapped = Call(_v("xs"), "map", block=Block(_params("x"), _s(_v("x"))))
        assert _render(Call(mapped, "size")) == "xs.map do|x|;x;end.size"


class TestOperators:
    def test_unary(self) -> None:
        assert _render(Call(_v("a"), "-@")) == "-a"
        assert _render(Call(_v("a"), "!")) == "!a"
        assert _render(Call(_v("a"), "~")) == "~a"

    def test_not_is_not_a_unary_method(self) -> None:
        assert _render(Call(_v("a"), "not")) == "a.not"

    def test_bang_before_tilde(self) -> None:
        assert _render(Call(Call(_v("a"), "~"), "!")) == "! ~a"

    def test_negative_literal_base(self) -> None:
        assert _render(_op(Integer(-2), "**", Integer(2))) == "(-2)**2"

    def test_negation_of_power(self) -> None:
        assert _render(Call(_op(Integer(2), "**", Integer(2)), "-@")) == "-2**2"

    @pytest.mark.parametrize(
        ("operand", "expected"),
        [
            (Call(Integer(2), "abs"), "-(2.abs)"),
            (Call(Float(1.5), "floor"), "-(1.5.floor)"),
            (Call(Integer(2), "[]", (Integer(0),)), "-(2[0])"),
            (Call(Call(Integer(2), "abs"), "to_s"), "-(2.abs.to_s)"),
            (_op(Call(Integer(2), "abs"), "**", Integer(2)), "-(2.abs**2)"),
        ],
    )
    def test_negation_of_literal_member_access(self, operand: Node, expected: str) -> None:
        # Without the group the sign becomes part of the literal
        assert _render(Call(operand, "-@")) == expected

    def test_unary_plus_of_literal_member_access(self) -> None:
        assert _render(Call(Call(Integer(2), "abs"), "+@")) == "+(2.abs)"

    def test_negation_of_literals(self) -> None:
        assert _render(Call(Integer(2), "-@")) == "-2"
        assert _render(Call(Float(1.5), "-@")) == "-1.5"
        assert _render(Call(Call(_v("a"), "abs"), "-@")) == "-a.abs"

    def test_receiver_grouping(self) -> None:
        assert _render(Call(_op(_v("a"), "+", _v("b")), "abs")) == "(a+b).abs"

    def test_negative_receiver(self) -> None:
        assert _render(Call(Integer(-1), "abs")) == "(-1).abs"

    def test_keyword_logic(self) -> None:
        left_nested = Or(And(_v("a"), _v("b"), keyword=True), _v("c"), keyword=True)
        right_nested = Or(_v("a"), And(_v("b"), _v("c"), keyword=True), keyword=True)
        assert _render(left_nested) == "a and b or c"
        assert _render(right_nested) == "a or (b and c)"

    def test_short_circuit_chains(self) -> None:
        assert _render(And(And(_v("a"), _v("b")), _v("c"))) == "a&&b&&c"
        assert _render(And(_v("a"), And(_v("b"), _v("c")))) == "a&&b&&c"
        assert _render(And(Or(_v("a"), _v("b")), _v("c"))) == "(a||b)&&c"

    def test_not(self) -> None:
        assert _render(Not(And(_v("a"), _v("b")))) == "not a&&b"
        assert _render(Not(Or(_v("a"), _v("b"), keyword=True))) == "not (a or b)"

    def test_low_precedence_argument(self) -> None:
        tree = _call("m", And(_v("a"), _v("b"), keyword=True))
        assert _render(tree) == "m((a and b))"

    def test_assignment_argument(self) -> None:
        assert _render(_call("m", LocalVariableWrite("x", Integer(1)))) == "m(x=1)"

    def test_assigning_not(self) -> None:
        assert _render(LocalVariableWrite("x", Not(_v("a")))) == "x=(not a)"

    def test_chained_assignment(self) -> None:
        tree = LocalVariableWrite("a", LocalVariableWrite("b", Integer(1)))
        assert _render(tree) == "a=b=1"

    def test_subtraction_associativity(self) -> None:
        assert _render(_op(_op(_v("a"), "-", _v("b")), "-", _v("c"))) == "a-b-c"
        assert _render(_op(_v("a"), "-", _op(_v("b"), "-", _v("c")))) == "a-(b-c)"

    def test_non_associative_comparison(self) -> None:
        assert _render(_op(_op(_v("a"), "<", _v("b")), "==", TrueLiteral())) == "a<b==true"
        assert _render(_op(_op(_v("a"), "==", _v("b")), "==", _v("c"))) == "(a==b)==c"

    def test_subtracting_negative(self) -> None:
        assert _render(_op(_v("a"), "-", Integer(-1))) == "a--1"

    def test_explicit_parentheses_kept(self) -> None:
        tree = _op(Parentheses(_s(_op(_v("a"), "+", _v("b")))), "*", _v("c"))
        assert _render(tree) == "(a+b)*c"

    def test_operator_write(self) -> None:
        assert _render(OperatorWrite(InstanceVariableRead("@n"), "||=", Integer(0))) == "@n||=0"

    def test_operator_method_with_splat_uses_dot(self) -> None:
        assert _render(Call(_v("a"), "+", (Splat(_v("b")),))) == "a.+(*b)"


class TestRanges:
    def test_inclusive_and_exclusive(self) -> None:
        assert _render(Range(Integer(1), Integer(10))) == "1..10"
        assert _render(Range(Integer(1), Integer(10), exclusive=True)) == "1...10"

    def test_open_ranges_grouped(self) -> None:
        assert _render(Range(Integer(1), None)) == "(1..)"
        assert _render(Range(None, Integer(5))) == "(..5)"

    def test_range_receiver(self) -> None:
        assert _render(Call(Range(Integer(1), Integer(3)), "to_a")) == "(1..3).to_a"


class TestLiterals:
    def test_array(self) -> None:
        tree = Array(
            (Integer(1), String("a"), Symbol("b"), NilLiteral(), TrueLiteral(), FalseLiteral())
        )
        assert _render(tree) == '[1,"a",:b,nil,true,false]'

    def test_hash(self) -> None:
        tree = LocalVariableWrite(
            "h",
            Hash(
                (
                    Pair(Symbol("a"), Integer(1)),
                    Pair(String("b"), Integer(2)),
                    Pair(Symbol("c"), Symbol("d")),
                )
            ),
        )
        assert _render(tree) == 'h={a:1,"b"=>2,c: :d}'

    def test_hash_at_statement_start(self) -> None:
        tree = Call(Hash((Pair(Symbol("a"), Integer(1)),)), "keys")
        assert _render(tree) == "({a:1}.keys)"

    def test_non_label_symbol_key(self) -> None:
        tree = LocalVariableWrite("h", Hash((Pair(Symbol("ok?"), TrueLiteral()),)))
        assert _render(tree) == "h={:ok? =>true}"

    def test_float(self) -> None:
        assert _render(LocalVariableWrite("f", Float(1e-05))) == "f=1e-5"

    def test_interpolated_string_value(self) -> None:
        string = InterpolatedString(
            (String("a"), EmbeddedStatements(_s(_v("b"))), String("c"))
        )
        assert _render(LocalVariableWrite("s", string)) == 's="a#{b}c"'


class TestVariables:
    def test_writes(self) -> None:
        assert _render(InstanceVariableWrite("@a", Integer(1))) == "@a=1"
        assert _render(GlobalVariableWrite("$a", Integer(1))) == "$a=1"
        assert _render(ConstantWrite("A", Integer(1))) == "A=1"

    def test_reads(self) -> None:
        assert _render(GlobalVariableRead("$stdout")) == "$stdout"
        assert _render(ConstantRead("ARGV")) == "ARGV"

    def test_top_level_constant(self) -> None:
        assert _render(ConstantPath(None, "Object")) == "::Object"

    def test_match_operator_guard(self) -> None:
        assert _render(LocalVariableWrite("x", Call(_v("y"), "~"))) == "x= ~y"
        assert _render(_op(_v("a"), "=~", _v("b"))) == "a=~b"


class TestJumps:
    def test_return(self) -> None:
        from kureha.nodes import Return

        assert _render(Return()) == "return"
        assert _render(Return((_v("x"),))) == "return x"
        assert _render(Return((_v("a"), _v("b")))) == "return a,b"

    def test_return_string(self) -> None:
        from kureha.nodes import Return

        assert _render(Return((String("x"),))) == 'return"x"'
        assert _render(Return((String("x"),)), space_after_keywords=True) == 'return "x"'

    def test_break_and_next(self) -> None:
        from kureha.nodes import Break, Next

        assert _render(Break()) == "break"
        assert _render(Next((Integer(1),))) == "next 1"

    def test_yield(self) -> None:
        from kureha.nodes import Yield

        assert _render(Yield()) == "yield"
        assert _render(Yield((_v("a"), Integer(1)))) == "yield(a,1)"

    def test_super(self) -> None:
        from kureha.nodes import Super

        assert _render(Super()) == "super"
        assert _render(Super(())) == "super()"
        assert _render(Super((_v("a"),))) == "super(a)"
        assert _render(Super(block=BlockArgument(_v("b")))) == "super &b"

    def test_return_with_block_uses_braces(self) -> None:
        from kureha.nodes import Return

        doubled = Call(
            _v("xs"), "map", block=Block(_params("x"), _s(_op(_v("x"), "*", Integer(2))))
        )
        assert _render(Return((doubled,))) == "return xs.map{|x|x*2}"


class TestContextOptions:
    def test_renderer_reads_context_options(self) -> None:
        from kureha.config import render_options_context
        from kureha.renderers.ruby import RubyRenderer

        tree = Program(_s(_call("a"), _call("b")))
        renderer = RubyRenderer()
        with render_options_context(RenderOptions(insert_separators=False)):
            assert renderer.render(tree) == "a\nb"
        assert renderer.render(tree) == "a;b"

    def test_explicit_options_win(self) -> None:
        from kureha.config import render_options_context
        from kureha.renderers.ruby import RubyRenderer

        tree = Program(_s(_call("a"), _call("b")))
        renderer = RubyRenderer(RenderOptions())
        with render_options_context(RenderOptions(insert_separators=False)):
            assert renderer.render(tree) == "a;b"

    @pytest.mark.parametrize("insert_separators", [True, False])
    def test_renderer_is_reusable(self, insert_separators: bool) -> None:
        from kureha.renderers.ruby import RubyRenderer

        renderer = RubyRenderer(RenderOptions(insert_separators=insert_separators))
        tree = Program(_s(Def("a"), Def("b")))
        assert renderer.render(tree) == renderer.render(tree)
