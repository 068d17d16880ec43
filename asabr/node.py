"""Network nodes: identity, naming and an attached node manager."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from .parsing import Lexer, read_value


@dataclass
class NodeInfo:
    """Identity of a node in the network."""

    id: int
    name: str
    excluded: bool = False

    @classmethod
    def parse(cls, lexer: Lexer) -> NodeInfo:
        """Read a node id followed by its name.

        Raises :class:`~asabr.parsing.ParsingError` on missing or bad tokens.
        """
        node_id = read_value(lexer, int)
        name = read_value(lexer, str)
        return cls(id=node_id, name=name)


@total_ordering
class Node:
    """A node with its information and the manager that governs it.

    Nodes compare and sort by id.
    """

    __slots__ = ("info", "manager")

    def __init__(self, info: NodeInfo, manager: Any) -> None:
        self.info = info
        self.manager = manager

    @classmethod
    def try_new(cls, info: NodeInfo, manager: Any) -> Node:
        """Build a node; any info and manager pair is accepted."""
        return cls(info, manager)

    @property
    def node_id(self) -> int:
        return self.info.id

    @property
    def name(self) -> str:
        return self.info.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.info.id == other.info.id

    def __lt__(self, other: Node) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.info.id < other.info.id

    def __hash__(self) -> int:
        return hash(self.info.id)

    def __repr__(self) -> str:
        return f"Node(info={self.info!r}, manager={self.manager!r})"