"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from kureha.nodes import (
    Block,
    Call,
    ClassDef,
    ConstantRead,
    Def,
    EmbeddedStatements,
    If,
    InstanceVariableRead,
    InstanceVariableWrite,
    Integer,
    InterpolatedString,
    LocalVariableRead,
    LocalVariableWrite,
    Node,
    Parameters,
    Program,
    RequiredParameter,
    Return,
    Statements,
    String,
    Symbol,
)


def _method(i: int) -> Def:
    """A method with a loop, a conditional and an interpolated string."""
    item = LocalVariableRead("item")
    return Def(
        f"process_{i}",
        Parameters(requireds=(RequiredParameter("items"),)),
        Statements(
            (
                LocalVariableWrite("total", Integer(0)),
                Call(
                    LocalVariableRead("items"),
                    "each",
                    block=Block(
                        Parameters(requireds=(RequiredParameter("item"),)),
                        Statements(
                            (
                                If(
                                    Call(item, ">", (Integer(i),)),
                                    Statements(
                                        (
                                            LocalVariableWrite(
                                                "total",
                                                Call(
                                                    LocalVariableRead("total"),
                                                    "+",
                                                    (Call(item, "*", (Integer(2),)),),
                                                ),
                                            ),
                                        )
                                    ),
                                ),
                            )
                        ),
                    ),
                ),
                Call(
                    None,
                    "puts",
                    (
                        InterpolatedString(
                            (
                                String(f"section {i}: "),
                                EmbeddedStatements(Statements((LocalVariableRead("total"),))),
                            )
                        ),
                    ),
                ),
                Return((LocalVariableRead("total"),)),
            )
        ),
    )


def _class(i: int) -> ClassDef:
    return ClassDef(
        ConstantRead(f"Worker{i}"),
        ConstantRead("Base"),
        Statements(
            (
                Def(
                    "initialize",
                    Parameters(requireds=(RequiredParameter("name"),)),
                    Statements((InstanceVariableWrite("@name", LocalVariableRead("name")),)),
                ),
                Def(
                    "to_h",
                    body=Statements(
                        (
                            Call(
                                None,
                                "build",
                                (Symbol("name"), InstanceVariableRead("@name")),
                            ),
                        )
                    ),
                ),
                *(_method(i * 10 + j) for j in range(5)),
            )
        ),
    )


@pytest.fixture
def large_program() -> Program:
    """A program of 100 classes with 7 methods each."""
    return Program(Statements(tuple(_class(i) for i in range(100))))


@pytest.fixture
def small_programs() -> list[Node]:
    """Many one-method programs, as a build step would render per file."""
    return [Program(Statements((_method(i),))) for i in range(200)]
