"""Symbolic jump labels, loop contexts and label resolution to addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, TextIO

from xsmc.stage3.nodes import CODE_END, CODE_START, HEADER_SIZE, INSTR_SIZE

MAX_LOOP_DEPTH = 100

_LABEL_LINE = re.compile(r"L(\d+)")
_JMP = re.compile(r"JMP L(-?\d+)")
_JZ = re.compile(r"JZ R(-?\d+), L(-?\d+)")
_JNZ = re.compile(r"JNZ R(-?\d+), L(-?\d+)")


class UndefinedLabelError(LookupError):
    """Raised when a jump refers to a label that was never placed."""


class CodeAreaExceededError(RuntimeError):
    """Raised when the program does not fit in the code area."""


class LoopNestingError(RuntimeError):
    """Raised when loops are nested deeper than supported."""


@dataclass(frozen=True)
class LoopContext:
    break_label: int
    continue_label: int


class LabelManager:
    """Issues fresh label numbers and tracks the enclosing loops."""

    def __init__(self) -> None:
        self._next = 0
        self._loops: List[LoopContext] = []

    def new_label(self) -> int:
        """Return an unused label number."""
        label = self._next
        self._next += 1
        return label

    def reset(self) -> None:
        """Restart numbering and forget all loops."""
        self._next = 0
        self._loops.clear()

    def emit(self, out: TextIO, label: int) -> None:
        """Write the definition line of ``label``."""
        out.write(f"L{label}:\n")

    def push_loop(self, break_label: int, continue_label: int) -> None:
        """Enter a loop whose exit and restart points are the given labels."""
        if len(self._loops) >= MAX_LOOP_DEPTH:
            raise LoopNestingError("Loop nesting depth exceeded")
        self._loops.append(LoopContext(break_label, continue_label))

    def pop_loop(self) -> None:
        """Leave the innermost loop, if any."""
        if self._loops:
            self._loops.pop()

    def current_loop(self) -> Optional[LoopContext]:
        """The innermost loop, or None outside every loop."""
        return self._loops[-1] if self._loops else None

    def in_loop(self) -> bool:
        """True while inside at least one loop."""
        return bool(self._loops)


def _label_of(line: str) -> Optional[int]:
    if len(line) >= 2 and line[0] == "L" and line[1].isdigit():
        return int(_LABEL_LINE.match(line).group(1))
    return None


def build_label_table(lines: Iterable[str]) -> Dict[int, int]:
    """Map each label defined in ``lines`` to the address it stands for.

    The first lines form the executable header and are not counted.
    """
    table: Dict[int, int] = {}
    address = CODE_START
    for position, line in enumerate(lines):
        if position < HEADER_SIZE:
            continue
        label = _label_of(line)
        if label is not None:
            table.setdefault(label, address)
            continue
        address += INSTR_SIZE
        if address >= CODE_END:
            raise CodeAreaExceededError("Code area exceeded")
    return table


def _resolve(table: Dict[int, int], label: int) -> int:
    try:
        return table[label]
    except KeyError:
        raise UndefinedLabelError(f"Undefined label L{label}") from None


def _match(pattern: "re.Pattern[str]", line: str) -> "re.Match[str]":
    match = pattern.match(line)
    if match is None:
        raise ValueError(f"malformed jump: {line.rstrip()!r}")
    return match


def translate_labels(lines: Iterable[str], table: Dict[int, int]) -> Iterator[str]:
    """Yield ``lines`` without label definitions and with jumps to addresses."""
    for line in lines:
        if _label_of(line) is not None:
            continue
        if line.startswith("JMP L"):
            label = int(_match(_JMP, line).group(1))
            yield f"JMP {_resolve(table, label)}\n"
        elif line.startswith("JZ"):
            match = _match(_JZ, line)
            reg, label = int(match.group(1)), int(match.group(2))
            yield f"JZ R{reg}, {_resolve(table, label)}\n"
        elif line.startswith("JNZ"):
            match = _match(_JNZ, line)
            reg, label = int(match.group(1)), int(match.group(2))
            yield f"JNZ R{reg}, {_resolve(table, label)}\n"
        else:
            yield line