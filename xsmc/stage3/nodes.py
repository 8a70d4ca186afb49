"""Abstract syntax tree for programs with conditionals and loops."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

MAX_LABELS = 256

STACK_START = 4096
CODE_START = 2056
CODE_END = 4095
NUM_STATIC_VARS = 26
HEADER_SIZE = 8
TOTAL_REGISTERS = 20
INSTR_SIZE = 2


class NodeType(IntEnum):
    NUM = 1
    ID = 2
    PLUS = 3
    MINUS = 4
    MUL = 5
    DIV = 6
    ASSIGN = 7
    READ = 8
    WRITE = 9
    CONNECTOR = 10
    WHILE = 11
    IF = 12
    IFELSE = 13
    BREAK = 14
    CONTINUE = 15
    DOWHILE = 16
    REPEAT = 17
    LT = 18
    LE = 19
    GT = 20
    GE = 21
    EQ = 22
    NE = 23


class VarType(IntEnum):
    INT = 101
    STRING = 102
    BOOL = 103
    NONE = 104


@dataclass
class Node:
    nodetype: NodeType
    val: int = 0
    type: VarType = VarType.NONE
    varname: Optional[str] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None


def make_num(val: int) -> Node:
    """Integer constant."""
    return Node(NodeType.NUM, val=val, type=VarType.INT)


def make_var(name: str) -> Node:
    """Variable reference; every variable is an integer."""
    return Node(NodeType.ID, type=VarType.INT, varname=name)


def make_arith(nodetype: NodeType, left: Node, right: Node) -> Node:
    """Binary arithmetic operation yielding an integer."""
    return Node(nodetype, type=VarType.INT, left=left, right=right)


def make_bool(nodetype: NodeType, left: Node, right: Node) -> Node:
    """Binary comparison yielding a boolean."""
    return Node(nodetype, type=VarType.BOOL, left=left, right=right)


def make_assign(ident: Node, expr: Node) -> Node:
    """Assignment of ``expr`` to the variable named by ``ident``."""
    target = Node(NodeType.ID, val=expr.val, type=VarType.INT, varname=ident.varname)
    return Node(NodeType.ASSIGN, varname=ident.varname, left=target, right=expr)


def make_read(ident: Node) -> Node:
    """Read a value into the variable ``ident``."""
    return Node(NodeType.READ, varname=ident.varname, left=ident)


def make_write(expr: Node) -> Node:
    """Write the value of ``expr``."""
    return Node(NodeType.WRITE, left=expr)


def make_connector(left: Optional[Node], right: Optional[Node]) -> Node:
    """Join two statements in sequence."""
    return Node(NodeType.CONNECTOR, left=left, right=right)


def make_while(condition: Node, body: Optional[Node]) -> Node:
    """Loop that tests ``condition`` before each pass."""
    return Node(NodeType.WHILE, left=condition, right=body)


def make_break() -> Node:
    """Leave the innermost loop."""
    return Node(NodeType.BREAK)


def make_continue() -> Node:
    """Jump to the start of the innermost loop."""
    return Node(NodeType.CONTINUE)


def make_do_while(body: Optional[Node], condition: Node) -> Node:
    """Loop that runs ``body`` first and repeats while ``condition`` holds."""
    return Node(NodeType.DOWHILE, left=body, right=condition)


def make_repeat_until(body: Optional[Node], condition: Node) -> Node:
    """Loop that runs ``body`` first and repeats until ``condition`` holds."""
    return Node(NodeType.REPEAT, left=body, right=condition)


def make_if_else(condition: Node, if_body: Optional[Node], else_body: Optional[Node]) -> Node:
    """Two-way branch; the bodies hang off a connector on the right."""
    branches = make_connector(if_body, else_body)
    return Node(NodeType.IFELSE, left=condition, right=branches)


def make_if(condition: Node, if_body: Optional[Node]) -> Node:
    """One-way branch."""
    return Node(NodeType.IF, left=condition, right=if_body)