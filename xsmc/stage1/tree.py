"""Binary expression trees of integer leaves and operator nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class ExprNode:
    """A leaf holds ``val``; an interior node holds ``op`` and two children."""

    val: int = 0
    op: Optional[str] = None
    left: Optional["ExprNode"] = None
    right: Optional["ExprNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.op is None

    @property
    def label(self) -> str:
        return str(self.val) if self.op is None else self.op


def make_leaf(n: int) -> ExprNode:
    """Create a number leaf."""
    return ExprNode(val=n)


def make_operator(op: str, left: Optional[ExprNode], right: Optional[ExprNode]) -> ExprNode:
    """Create an operator node with two children."""
    return ExprNode(val=0, op=op, left=left, right=right)


def inorder(root: Optional[ExprNode]) -> Iterator[str]:
    """Yield node labels left, root, right."""
    if root is None:
        return
    yield from inorder(root.left)
    yield root.label
    yield from inorder(root.right)


def preorder(root: Optional[ExprNode]) -> Iterator[str]:
    """Yield node labels root, left, right."""
    if root is None:
        return
    yield root.label
    yield from preorder(root.left)
    yield from preorder(root.right)


def postorder(root: Optional[ExprNode]) -> Iterator[str]:
    """Yield node labels left, right, root."""
    if root is None:
        return
    yield from postorder(root.left)
    yield from postorder(root.right)
    yield root.label