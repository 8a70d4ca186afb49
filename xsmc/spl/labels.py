"""Named jump targets and the stack of enclosing while loops."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


class LabelRedeclaredError(ValueError):
    """Raised when a named label is declared a second time."""


@dataclass(frozen=True)
class Label:
    name: str


class LabelTable:
    """Declared labels, generated labels and the enclosing while loops."""

    def __init__(self, line: int = 0) -> None:
        self.line = line
        self._declared: Dict[str, Label] = {}
        self._counter = 1
        self._whiles: List[Tuple[Label, Label]] = []

    def create(self) -> Label:
        """Return a fresh generated label; it is not entered in the table."""
        label = Label(f"_L{self._counter}")
        self._counter += 1
        return label

    def add(self, name: str) -> Label:
        """Declare a named label."""
        if name in self._declared:
            raise LabelRedeclaredError(f"{self.line}: Label '{name}' redeclared.")
        label = Label(name)
        self._declared[name] = label
        return label

    def get(self, name: str) -> Optional[Label]:
        """The declared label called ``name``, or None."""
        return self._declared.get(name)

    def push_while(self, start: Label, end: Label) -> None:
        """Enter a while loop with the given start and end labels."""
        self._whiles.append((start, end))

    def pop_while(self) -> None:
        """Leave the innermost while loop."""
        if not self._whiles:
            raise IndexError("not inside a while loop")
        self._whiles.pop()

    def _innermost(self) -> Tuple[Label, Label]:
        if not self._whiles:
            raise IndexError("not inside a while loop")
        return self._whiles[-1]

    def while_end(self) -> Label:
        """End label of the innermost while loop."""
        return self._innermost()[1]

    def while_start(self) -> Label:
        """Start label of the innermost while loop."""
        return self._innermost()[0]