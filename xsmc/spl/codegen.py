"""XSM code generation for SPL statements."""

from __future__ import annotations

from typing import Optional, TextIO

from xsmc.spl.exprgen import ExpressionGenerator
from xsmc.spl.labels import LabelTable
from xsmc.spl.node import Node, NodeType
from xsmc.spl.registers import register_name


class UndeclaredLabelError(LookupError):
    """Raised when a call or goto names a label that was never declared."""


_SIMPLE = {
    NodeType.BACKUP: "BACKUP",
    NodeType.RESTORE: "RESTORE",
    NodeType.RETURN: "RET",
    NodeType.IRETURN: "IRET",
    NodeType.HALT: "HALT",
    NodeType.BREAKPOINT: "BRKP",
    NodeType.READ: "IN",
}


class CodeGenerator(ExpressionGenerator):
    """Emits XSM assembly for a whole SPL syntax tree.

    Expressions are evaluated into the compiler's scratch registers; loops and
    branches use generated labels from ``labels``, which also holds the
    named labels that ``call`` and ``goto`` may refer to.
    """

    def __init__(self, out: TextIO, labels: Optional[LabelTable] = None) -> None:
        super().__init__(out)
        self.labels = labels if labels is not None else LabelTable()
        self._handlers.update(
            {kind: self._simple for kind in _SIMPLE}
        )
        self._handlers.update(
            {
                NodeType.STMTLIST: self._statements,
                NodeType.ASSIGN: self._assign,
                NodeType.IF: self._if,
                NodeType.WHILE: self._while,
                NodeType.BREAK: self._break,
                NodeType.CONTINUE: self._continue,
                NodeType.LOADI: lambda node: self._transfer("LOADI", node, store=False),
                NodeType.LOAD: lambda node: self._transfer("LOAD", node, store=False),
                NodeType.STORE: lambda node: self._transfer("STORE", node, store=True),
                NodeType.READI: self._readi,
                NodeType.PRINT: self._print,
                NodeType.INLINE: self._inline,
                NodeType.ENCRYPT: self._encrypt,
                NodeType.LABEL_DEF: self._label_def,
                NodeType.CALL: lambda node: self._jump("CALL", node),
                NodeType.GOTO: lambda node: self._jump("GOTO", node),
            }
        )

    def generate(self, root: Optional[Node]) -> None:
        """Emit code for the statement or expression ``root``."""
        super().generate(root)

    # -- helpers -----------------------------------------------------------

    def _place(self, name: str) -> None:
        self.out.write(f"{name}:\n")

    def _condition_jump(self, condition: Node, target: str) -> None:
        if condition.nodetype == NodeType.REG:
            self._emit(f"JZ {register_name(condition.value)}, {target}")
        else:
            self.generate(condition)
            self._emit(f"JZ {self._top()}, {target}")
            self._pop()

    def _store_into(self, dest: str, value: Node) -> None:
        kind = value.nodetype
        if kind == NodeType.REG:
            self._emit(f"MOV {dest}, {register_name(value.value)}")
        elif kind == NodeType.NUM:
            self._emit(f"MOV {dest}, {value.value}")
        elif kind == NodeType.STRING:
            self._emit(f"MOV {dest}, {value.name}")
        elif kind == NodeType.PORT:
            scratch = self._scratch(self.temps)
            self._emit(f"PORT {scratch}, {register_name(value.value)}", f"MOV {dest}, {scratch}")
        else:
            self.generate(value)
            self._emit(f"MOV {dest}, {self._top()}")
            self._pop()

    # -- statement handlers ------------------------------------------------

    def _simple(self, node: Node) -> None:
        self._emit(_SIMPLE[node.nodetype])

    def _statements(self, node: Node) -> None:
        self.generate(node.ptr1)
        self.generate(node.ptr2)

    def _assign(self, node: Node) -> None:
        target, value = node.ptr1, node.ptr2
        if target.nodetype != NodeType.ADDR_EXPR:
            self._store_into(register_name(target.value), value)
            return
        inner = target.ptr1
        if inner.nodetype == NodeType.NUM:
            self._store_into(f"[{inner.value}]", value)
        elif inner.nodetype == NodeType.REG:
            self._store_into(f"[{register_name(inner.value)}]", value)
        else:
            self.generate(inner)
            self._store_into(f"[{self._top()}]", value)
            self._pop()

    def _if(self, node: Node) -> None:
        otherwise = self.labels.create()
        end = self.labels.create()
        self._condition_jump(node.ptr1, otherwise.name)
        self.generate(node.ptr2)
        self._emit(f"JMP {end.name}")
        self._place(otherwise.name)
        self.generate(node.ptr3)
        self._place(end.name)

    def _while(self, node: Node) -> None:
        start = self.labels.create()
        end = self.labels.create()
        self.labels.push_while(start, end)
        self._place(start.name)
        self._condition_jump(node.ptr1, end.name)
        self.generate(node.ptr2)
        self._emit(f"JMP {start.name}")
        self.labels.pop_while()
        self._place(end.name)

    def _break(self, node: Node) -> None:
        self._emit(f"JMP {self.labels.while_end().name}")

    def _continue(self, node: Node) -> None:
        self._emit(f"JMP {self.labels.while_start().name}")

    def _transfer(self, op: str, node: Node, store: bool) -> None:
        def write(first: str, second: str) -> None:
            a, b = (second, first) if store else (first, second)
            self._emit(f"{op} {a}, {b}")

        left, right = node.ptr1, node.ptr2
        if left.nodetype == NodeType.REG:
            reg1 = register_name(left.value)
            if right.nodetype == NodeType.REG:
                write(reg1, register_name(right.value))
            elif right.nodetype == NodeType.NUM:
                write(reg1, str(right.value))
            else:
                self.generate(right)
                write(reg1, self._top())
                self._pop()
            return
        self.generate(left)
        if right.nodetype == NodeType.REG:
            write(self._top(), register_name(right.value))
        elif right.nodetype == NodeType.NUM:
            write(self._top(), str(right.value))
        else:
            self.generate(right)
            write(self._top(1), self._top())
            self._pop()
        self._pop()

    def _readi(self, node: Node) -> None:
        self._emit("INI", f"PORT {register_name(node.ptr1.value)}, P0")

    def _print(self, node: Node) -> None:
        self.generate(node.ptr1)
        self._emit(f"PORT P1, {self._top()}", "OUT")
        self._pop()

    def _inline(self, node: Node) -> None:
        self._emit(node.ptr1.name)

    def _encrypt(self, node: Node) -> None:
        self._emit(f"ENCRYPT {register_name(node.ptr1.value)}")

    def _label_def(self, node: Node) -> None:
        self._place(node.ptr1.name)

    def _jump(self, op: str, node: Node) -> None:
        target = node.ptr1
        if target.nodetype == NodeType.NUM:
            self._emit(f"{op} {target.value}")
            return
        if self.labels.get(target.name) is None:
            raise UndeclaredLabelError(f"{node.value}: Label '{target.name}' is not declared")
        self._emit(f"{op} {target.name}")