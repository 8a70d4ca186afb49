"""Abstract syntax tree for straight-line programs with variables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


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


class VarType(IntEnum):
    INT = 101
    STRING = 102
    NONE = 103


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
    """Variable reference."""
    return Node(NodeType.ID, varname=name)


def make_arith(nodetype: NodeType, left: Node, right: Node) -> Node:
    """Binary arithmetic operation."""
    return Node(nodetype, left=left, right=right)


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