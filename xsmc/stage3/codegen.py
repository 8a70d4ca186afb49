"""XSM code generation for programs with conditionals and loops."""

from __future__ import annotations

from typing import Optional, TextIO

from xsmc.registers import RegisterAllocator
from xsmc.stage3.labels import LabelManager
from xsmc.stage3.memory import address_of
from xsmc.stage3.nodes import Node, NodeType

__all__ = ["HEADER", "UnknownNodeError", "CodeGenerator", "write_header", "write_exit"]

HEADER = "0\n2056\n0\n0\n0\n0\n0\n0\nBRKP\nMOV SP,4123\n"

_EXIT = (
    'MOV R0, "Exit"\n'
    "PUSH R0\n"
    "PUSH R0\n"
    "PUSH R0\n"
    "PUSH R0\n"
    "PUSH R0\n"
    "CALL 0\n"
    "SUB SP, 5"
)

_BINARY = {
    NodeType.PLUS: "ADD",
    NodeType.MINUS: "SUB",
    NodeType.MUL: "MUL",
    NodeType.DIV: "DIV",
    NodeType.LT: "LT",
    NodeType.LE: "LE",
    NodeType.GT: "GT",
    NodeType.GE: "GE",
    NodeType.EQ: "EQ",
    NodeType.NE: "NE",
}

_POP_ARGS = "POP R0\nPOP R0\nPOP R0\nPOP R0\nPOP R0\n"


class UnknownNodeError(Exception):
    """Raised when the tree holds a node the generator cannot translate."""


def write_header(out: TextIO) -> None:
    """Write the executable header and stack pointer setup."""
    out.write(HEADER)


def write_exit(out: TextIO) -> None:
    """Write the system call sequence that ends the program."""
    out.write(_EXIT)


class CodeGenerator:
    """Emits XSM instructions with symbolic labels for a syntax tree."""

    def __init__(
        self,
        out: TextIO,
        registers: Optional[RegisterAllocator] = None,
        labels: Optional[LabelManager] = None,
    ) -> None:
        self.out = out
        self.registers = registers if registers is not None else RegisterAllocator()
        self.labels = labels if labels is not None else LabelManager()

    def _emit(self, line: str) -> None:
        self.out.write(line + "\n")

    def _label(self, label: int) -> None:
        self.labels.emit(self.out, label)

    def _condition_jump(self, mnemonic: str, condition: Node, label: int) -> None:
        reg = self.generate(condition)
        self._emit(f"{mnemonic} R{reg}, L{label}")
        self.registers.release()

    def generate(self, node: Optional[Node]) -> Optional[int]:
        """Emit code for ``node``; return the result register of an expression."""
        if node is None:
            return None
        kind = node.nodetype

        if kind == NodeType.NUM:
            reg = self.registers.allocate()
            self._emit(f"MOV R{reg}, {node.val}")
            return reg

        if kind == NodeType.ID:
            reg = self.registers.allocate()
            self._emit(f"MOV R{reg}, [{address_of(node.varname)}]")
            return reg

        if kind in _BINARY:
            left = self.generate(node.left)
            right = self.generate(node.right)
            self._emit(f"{_BINARY[kind]} R{left}, R{right}")
            self.registers.release()
            return left

        if kind == NodeType.ASSIGN:
            reg = self.generate(node.right)
            self._emit(f"MOV [{address_of(node.varname)}], R{reg}")
            self.registers.release()
            return None

        if kind == NodeType.READ:
            reg = self.registers.allocate()
            self._emit(f'MOV R{reg}, "Read"')
            self._emit(f"PUSH R{reg}")
            self._emit(f"MOV R{reg}, -1")
            self._emit(f"PUSH R{reg}")
            self._emit(f"MOV R{reg}, {address_of(node.varname)}")
            for _ in range(3):
                self._emit(f"PUSH R{reg}")
            self._emit("CALL 0")
            self.out.write(_POP_ARGS)
            self.registers.release()
            return None

        if kind == NodeType.WRITE:
            value = self.generate(node.left)
            reg = self.registers.allocate()
            self._emit(f'MOV R{reg}, "Write"')
            self._emit(f"PUSH R{reg}")
            self._emit(f"MOV R{reg}, -2")
            self._emit(f"PUSH R{reg}")
            self._emit(f"PUSH R{value}")
            self._emit(f"PUSH R{reg}")
            self._emit(f"PUSH R{reg}")
            self._emit("CALL 0")
            self.out.write(_POP_ARGS)
            self.registers.release()
            self.registers.release()
            return None

        if kind == NodeType.IF:
            end = self.labels.new_label()
            self._condition_jump("JZ", node.left, end)
            self.generate(node.right)
            self._label(end)
            return None

        if kind == NodeType.IFELSE:
            otherwise = self.labels.new_label()
            end = self.labels.new_label()
            self._condition_jump("JZ", node.left, otherwise)
            self.generate(node.right.left)
            self._emit(f"JMP L{end}")
            self._label(otherwise)
            self.generate(node.right.right)
            self._label(end)
            return None

        if kind == NodeType.WHILE:
            start = self.labels.new_label()
            end = self.labels.new_label()
            self.labels.push_loop(end, start)
            self._label(start)
            self._condition_jump("JZ", node.left, end)
            self.generate(node.right)
            self._emit(f"JMP L{start}")
            self._label(end)
            self.labels.pop_loop()
            return None

        if kind == NodeType.CONNECTOR:
            self.generate(node.left)
            self.generate(node.right)
            return None

        if kind == NodeType.BREAK:
            loop = self.labels.current_loop()
            if loop is not None:
                self._emit(f"JMP L{loop.break_label}")
            return None

        if kind == NodeType.CONTINUE:
            loop = self.labels.current_loop()
            if loop is not None:
                self._emit(f"JMP L{loop.continue_label}")
            return None

        if kind in (NodeType.DOWHILE, NodeType.REPEAT):
            start = self.labels.new_label()
            end = self.labels.new_label()
            self.labels.push_loop(end, start)
            self._label(start)
            self.generate(node.left)
            # do-while repeats while true; repeat-until repeats while false.
            mnemonic = "JNZ" if kind == NodeType.DOWHILE else "JZ"
            self._condition_jump(mnemonic, node.right, start)
            self._label(end)
            self.labels.pop_loop()
            return None

        raise UnknownNodeError("Unknown nodetype")