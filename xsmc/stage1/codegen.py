"""XSM code generation for plain arithmetic expression trees."""

from __future__ import annotations

from typing import Optional, TextIO

from xsmc.registers import RegisterAllocator
from xsmc.stage1.tree import ExprNode

HEADER = "0\n2056\n0\n0\n0\n0\n0\n0\n"

_MNEMONICS = {"+": "ADD", "-": "SUB", "*": "MUL", "/": "DIV"}


class UnknownOperatorError(ValueError):
    """Raised for an operator the generator cannot translate."""


def write_header(out: TextIO) -> None:
    """Write the XEXE executable header."""
    out.write(HEADER)


class CodeGenerator:
    """Emits XSM instructions for an expression tree."""

    def __init__(self, out: TextIO, registers: Optional[RegisterAllocator] = None) -> None:
        self.out = out
        self.registers = registers if registers is not None else RegisterAllocator()

    def generate(self, root: Optional[ExprNode]) -> Optional[int]:
        """Emit code for ``root`` and return the register holding its value."""
        if root is None:
            return None
        if root.op is None:
            reg = self.registers.allocate()
            self.out.write(f"MOV R{reg}, {root.val}\n")
            return reg

        left = self.generate(root.left)
        right = self.generate(root.right)
        mnemonic = _MNEMONICS.get(root.op[:1])
        if mnemonic is None:
            raise UnknownOperatorError(f"Unknown operator {root.op}")
        # The result always goes into the lower-numbered register.
        target, source = (left, right) if left < right else (right, left)
        self.out.write(f"{mnemonic} R{target}, R{source}\n")
        self.registers.release()
        return target