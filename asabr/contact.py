"""Contacts: time windows during which one node can transmit to another."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Optional

from .parsing import Lexer, read_value


@dataclass
class ContactInfo:
    """Endpoints and time window of a contact."""

    tx_node: int
    rx_node: int
    start: float
    end: float

    def is_valid(self) -> bool:
        """A contact is valid when it starts before it ends."""
        return self.start < self.end

    @classmethod
    def parse(cls, lexer: Lexer) -> ContactInfo:
        """Read transmitter, receiver, start and end, in that order."""
        tx_node = read_value(lexer, int)
        rx_node = read_value(lexer, int)
        start = read_value(lexer, float)
        end = read_value(lexer, float)
        return cls(tx_node, rx_node, start, end)


@total_ordering
class Contact:
    """A contact with the manager that handles its resources.

    Contacts order by transmitter, then receiver, then start time.
    Equality is identity, as two distinct contacts are never the same
    resource.
    """

    __slots__ = ("info", "manager", "work_area", "suppressed")

    def __init__(self, info: ContactInfo, manager: Any) -> None:
        self.info = info
        self.manager = manager
        self.work_area: Any = None
        self.suppressed = False

    @classmethod
    def try_new(cls, info: ContactInfo, manager: Any) -> Optional[Contact]:
        """Build a contact, or return ``None`` if the info or manager is inconsistent.

        The manager's ``try_init`` is only called for a valid time window.
        """
        if info.is_valid() and manager.try_init(info):
            return cls(info, manager)
        return None

    @property
    def tx_node(self) -> int:
        return self.info.tx_node

    @property
    def rx_node(self) -> int:
        return self.info.rx_node

    @property
    def sort_key(self) -> tuple[int, int, float]:
        return (self.info.tx_node, self.info.rx_node, self.info.start)

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __lt__(self, other: Contact) -> bool:
        if not isinstance(other, Contact):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __repr__(self) -> str:
        return f"Contact(info={self.info!r}, manager={self.manager!r})"