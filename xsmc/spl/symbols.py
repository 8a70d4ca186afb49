"""Symbolic constants and block-scoped register aliases of SPL programs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from xsmc.spl.node import Node, NodeType

DEFAULT_CONSTANTS_FILE = "splconstants.cfg"


class SymbolError(ValueError):
    """Raised for clashing, repeated or unknown symbols."""


@dataclass
class Alias:
    name: str
    no: int
    depth: int


class SymbolTable:
    """Constants visible everywhere and aliases bound to the block depth."""

    def __init__(self, line: int = 0) -> None:
        self.line = line
        self.depth = 0
        self._constants: Dict[str, int] = {}
        self._aliases: List[Alias] = []

    def _error(self, message: str) -> SymbolError:
        return SymbolError(f"{self.line}: {message}")

    def lookup_constant(self, name: str) -> Optional[int]:
        """Value of the constant ``name``, or None."""
        return self._constants.get(name)

    def lookup_alias(self, name: str) -> Optional[Alias]:
        """The most recent alias called ``name``, or None."""
        return next((a for a in reversed(self._aliases) if a.name == name), None)

    def lookup_alias_register(self, no: int) -> Optional[Alias]:
        """The most recent alias for register ``no``, or None."""
        return next((a for a in reversed(self._aliases) if a.no == no), None)

    def push_alias(self, name: str, no: int) -> None:
        """Bind ``name`` to register ``no`` in the current block."""
        if name in self._constants:
            raise self._error(f"Alias name {name} already used as symbolic contant!!")
        existing = self.lookup_alias(name)
        if existing is not None and existing.depth == self.depth:
            raise self._error(f"Alias name {name} already used as in the current block!!")
        same_register = self.lookup_alias_register(no)
        if same_register is not None and same_register.depth == self.depth:
            same_register.name = name
        else:
            self._aliases.append(Alias(name, no, self.depth))

    def pop_aliases(self) -> None:
        """Drop the aliases of the current block."""
        while self._aliases and self._aliases[-1].depth == self.depth:
            self._aliases.pop()

    def insert_constant(self, name: str, value: int) -> None:
        """Define a new constant."""
        if name in self._constants:
            raise self._error(f"Multiple Definition for Contant {name}")
        self._constants[name] = value

    def load_constants(self, path: Union[str, os.PathLike] = DEFAULT_CONSTANTS_FILE) -> None:
        """Add the ``name value`` pairs of a constants file, keeping existing ones."""
        try:
            with open(path, encoding="utf-8") as handle:
                tokens = handle.read().split()
        except OSError as exc:
            raise SymbolError(f"Unable to open {os.fspath(path)} file!") from exc
        for name, raw in zip(tokens[::2], tokens[1::2]):
            try:
                value = int(raw)
            except ValueError:
                break
            if name not in self._constants:
                self._constants[name] = value

    def substitute(self, node: Node) -> Node:
        """Turn an identifier node into a number or register node in place."""
        value = self.lookup_constant(node.name)
        if value is not None:
            node.nodetype = NodeType.NUM
            node.name = None
            node.value = value
            return node
        alias = self.lookup_alias(node.name)
        if alias is None:
            raise self._error(f"Unknown identifier {node.name} used!!")
        node.nodetype = NodeType.REG
        node.name = None
        node.value = alias.no
        return node