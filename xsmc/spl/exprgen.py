"""XSM code generation for SPL expressions using the compiler's scratch registers."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, TextIO

from xsmc.spl.node import Node, NodeType
from xsmc.spl.registers import COMPILER_REGISTER_BASE, register_name

# Comparison and logical operators: (mnemonic, mnemonic when the operands
# end up swapped because only the right operand was evaluated into a scratch
# register).
_COMPARE = {
    NodeType.LT: ("LT", "GT"),
    NodeType.GT: ("GT", "LT"),
    NodeType.EQ: ("EQ", "EQ"),
    NodeType.LE: ("LE", "GE"),
    NodeType.GE: ("GE", "LE"),
    NodeType.NE: ("NE", "NE"),
    NodeType.AND: ("MUL", "MUL"),
    NodeType.OR: ("ADD", "ADD"),
}

_ARITH = {
    NodeType.ADD: "ADD",
    NodeType.SUB: "SUB",
    NodeType.MUL: "MUL",
    NodeType.DIV: "DIV",
    NodeType.MOD: "MOD",
}

_COMMUTATIVE = {NodeType.ADD, NodeType.MUL}


class ExpressionGenerator:
    """Emits code that leaves each expression's value on a stack of scratch registers.

    Scratch registers start at R16; ``temps`` is how many are in use and
    ``line_count`` how many instruction lines have been written.
    """

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self.temps = 0
        self.line_count = 0
        self._handlers: Dict[NodeType, Callable[[Node], None]] = {
            **{kind: self._compare for kind in _COMPARE},
            **{kind: self._arith for kind in _ARITH},
            NodeType.NOT: self._not,
            NodeType.ADDR_EXPR: self._address,
            NodeType.NUM: self._num,
            NodeType.STRING: self._string,
            NodeType.REG: self._reg,
        }

    # -- helpers -----------------------------------------------------------

    def _emit(self, *lines: str) -> None:
        for line in lines:
            self.out.write(line + "\n")
        self.line_count += len(lines)

    def _scratch(self, index: int) -> str:
        return f"R{COMPILER_REGISTER_BASE + index}"

    def _top(self, below: int = 0) -> str:
        """Name of the scratch register ``below`` places under the top."""
        return self._scratch(self.temps - 1 - below)

    def _fresh(self) -> str:
        name = self._scratch(self.temps)
        self.temps += 1
        return name

    def _pop(self) -> None:
        self.temps -= 1

    # -- public ------------------------------------------------------------

    def generate(self, node: Optional[Node]) -> None:
        """Emit code for ``node``, pushing its value onto the scratch registers."""
        if node is None:
            return
        handler = self._handlers.get(node.nodetype)
        if handler is None:
            raise ValueError(f"Unknown Command {int(node.nodetype)} {node.name}")
        handler(node)

    # -- node handlers -----------------------------------------------------

    def _compare(self, node: Node) -> None:
        op, swapped = _COMPARE[node.nodetype]
        left, right = node.ptr1, node.ptr2
        if left.nodetype == NodeType.REG:
            sep = ",  " if node.nodetype == NodeType.LT else ", "
            reg1 = register_name(left.value)
            if right.nodetype == NodeType.REG:
                reg2 = register_name(right.value)
                dest = self._fresh()
                self._emit(f"MOV {dest}{sep}{reg1}", f"{op} {dest}{sep}{reg2}")
            else:
                self.generate(right)
                self._emit(f"{swapped} {self._top()}{sep}{reg1}")
            return
        self.generate(left)
        if right.nodetype == NodeType.REG:
            self._emit(f"{op} {self._top()}, {register_name(right.value)}")
        else:
            self.generate(right)
            self._emit(f"{op} {self._top(1)}, {self._top()}")
            self._pop()

    def _arith(self, node: Node) -> None:
        op = _ARITH[node.nodetype]
        left, right = node.ptr1, node.ptr2
        if left.nodetype == NodeType.REG:
            reg1 = register_name(left.value)
            if right.nodetype == NodeType.REG:
                dest = self._fresh()
                self._emit(f"MOV {dest}, {reg1}", f"{op} {dest}, {register_name(right.value)}")
            elif right.nodetype == NodeType.NUM:
                dest = self._fresh()
                self._emit(f"MOV {dest}, {reg1}", f"{op} {dest}, {right.value}")
            elif node.nodetype in _COMMUTATIVE:
                self.generate(right)
                self._emit(f"{op} {self._top()}, {reg1}")
            else:
                dest = self._fresh()
                self._emit(f"MOV {dest}, {reg1}")
                self.generate(right)
                self._emit(f"{op} {self._top(1)}, {self._top()}")
                self._pop()
            return
        self.generate(left)
        if right.nodetype == NodeType.REG:
            self._emit(f"{op} {self._top()}, {register_name(right.value)}")
        elif right.nodetype == NodeType.NUM:
            self._emit(f"{op} {self._top()}, {right.value}")
        else:
            self.generate(right)
            self._emit(f"{op} {self._top(1)}, {self._top()}")
            self._pop()

    def _not(self, node: Node) -> None:
        dest = self._fresh()
        self._emit(f"MOV {dest}, 1")
        operand = node.ptr1
        if operand.nodetype == NodeType.REG:
            self._emit(f"SUB {self._top()}, {register_name(operand.value)}")
        else:
            self.generate(operand)
            self._emit(f"SUB {self._top(1)}, {self._top()}")
            self._pop()

    def _address(self, node: Node) -> None:
        self.generate(node.ptr1)
        top = self._top()
        self._emit(f"MOV {top}, [{top}]")

    def _num(self, node: Node) -> None:
        self._emit(f"MOV {self._fresh()}, {node.value}")

    def _string(self, node: Node) -> None:
        self._emit(f"MOV {self._fresh()},  {node.name}")

    def _reg(self, node: Node) -> None:
        reg = register_name(node.value)
        self._emit(f"MOV {self._fresh()}, {reg}")