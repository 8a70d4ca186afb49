"""XSM code generation for programs with variables, read and write."""

from __future__ import annotations

from typing import Optional, TextIO

from xsmc.registers import RegisterAllocator
from xsmc.stage2.memory import address_of
from xsmc.stage2.nodes import Node, NodeType

HEADER = "0\n2056\n0\n0\n0\n0\n0\n0\nBRKP\nMOV SP,4123\n "

_ARITH = {
    NodeType.PLUS: "ADD",
    NodeType.MINUS: "SUB",
    NodeType.MUL: "MUL",
    NodeType.DIV: "DIV",
}

_POP_ARGS = "POP R0\nPOP R0\nPOP R0\nPOP R0\nPOP R0\n"


class UnknownNodeError(ValueError):
    """Raised for a node type the generator does not handle."""


def write_header(out: TextIO) -> None:
    """Write the executable header and stack pointer setup."""
    out.write(HEADER)


def write_exit(out: TextIO) -> None:
    """Write the library call that terminates the program."""
    out.write('MOV R0, "Exit"\n')
    out.write("PUSH R0\n" * 5)
    out.write("CALL 0\n")
    out.write("SUB SP, 5")


class CodeGenerator:
    """Emits XSM instructions for a syntax tree."""

    def __init__(self, out: TextIO, registers: Optional[RegisterAllocator] = None) -> None:
        self.out = out
        self.registers = registers if registers is not None else RegisterAllocator()

    def _emit(self, line: str) -> None:
        self.out.write(line + "\n")

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

        if kind in _ARITH:
            left = self.generate(node.left)
            right = self.generate(node.right)
            self._emit(f"{_ARITH[kind]} R{left}, R{right}")
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
            return None

        if kind == NodeType.CONNECTOR:
            self.generate(node.left)
            self.generate(node.right)
            return None

        raise UnknownNodeError("Unknown nodetype")