"""Syntax tree nodes for SPL programs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional


class NodeType(IntEnum):
    IF = 0
    LOAD = 1
    STORE = 2
    LOADI = 3
    READ = 4
    READI = 5
    PRINT = 6
    REG = 7
    NUM = 8
    STRING = 9
    IDENT = 10
    NONTERM = 11
    STRCMP = 12
    STRCOPY = 13
    WHILE = 14
    EQ = 15
    GT = 16
    LT = 17
    LE = 18
    GE = 19
    NE = 20
    AND = 21
    OR = 22
    NOT = 23
    BREAK = 24
    CONTINUE = 25
    ADDR_EXPR = 26
    HALT = 27
    BREAKPOINT = 28
    RETURN = 29
    IRETURN = 30
    INLINE = 31
    ENCRYPT = 32
    STMTLIST = 33
    ADD = 34
    SUB = 35
    MUL = 36
    DIV = 37
    MOD = 38
    ASSIGN = 39
    BACKUP = 40
    RESTORE = 41
    GOTO = 42
    CALL = 43
    PORT = 44
    LABEL_DEF = 45


@dataclass
class Node:
    """A tree node with up to three children."""

    nodetype: NodeType
    name: Optional[str] = None
    value: int = 0
    entry: Any = None
    ptr1: Optional["Node"] = None
    ptr2: Optional["Node"] = None
    ptr3: Optional["Node"] = None


def make_term(nodetype: NodeType, name: Optional[str], value: int) -> Node:
    """Create a leaf node."""
    return Node(nodetype, name=name, value=value)


def make_nonterm(nodetype: NodeType, a: Optional[Node], b: Optional[Node]) -> Node:
    """Create an interior node with two children."""
    return Node(nodetype, ptr1=a, ptr2=b)


def make_tree(a: Node, b: Optional[Node], c: Optional[Node], d: Optional[Node]) -> Node:
    """Attach ``b``, ``c`` and ``d`` as the children of ``a`` and return ``a``."""
    a.ptr1 = b
    a.ptr2 = c
    a.ptr3 = d
    return a