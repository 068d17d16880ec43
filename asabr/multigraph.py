"""Sender/receiver view of the contact plan used by pathfinding."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import groupby, islice
from typing import Iterable, Optional

from .contact import Contact
from .node import Node


@dataclass(eq=False)
class Receiver:
    """A receiving node and the contacts reaching it from one sender."""

    node: Node
    contacts_to_receiver: list[Contact]
    next: int = 0

    def lazy_prune_and_get_first_idx(self, current_time: float) -> Optional[int]:
        """Skip contacts that ended by ``current_time`` and return the first usable index."""
        for idx, contact in enumerate(
            islice(self.contacts_to_receiver, self.next, None), start=self.next
        ):
            if contact.info.end > current_time:
                self.next = idx
                return idx
        return None

    @property
    def is_excluded(self) -> bool:
        return self.node.info.excluded


@dataclass(eq=False)
class Sender:
    """A transmitting node and the receivers it has contacts with."""

    node: Node
    receivers: list[Receiver] = field(default_factory=list)


class Multigraph:
    """Nodes and contacts arranged for fast access by transmitter id.

    ``senders[i]`` belongs to the node with id ``i``. Receivers of a sender
    appear in descending receiver id; contacts of a receiver are sorted by
    start time.
    """

    def __init__(self, nodes: Iterable[Node], contact_plan: Iterable[Contact]) -> None:
        self.nodes: list[Node] = sorted(nodes)
        self.senders: list[Sender] = [Sender(node) for node in self.nodes]

        ordered = sorted(contact_plan, key=lambda c: c.sort_key)
        groups = [
            (key, list(group))
            for key, group in groupby(ordered, key=lambda c: (c.tx_node, c.rx_node))
        ]
        for (tx_id, rx_id), contacts in reversed(groups):
            self.senders[tx_id].receivers.append(
                Receiver(node=self.nodes[rx_id], contacts_to_receiver=contacts)
            )

    def apply_exclusions_sorted(self, exclusions: Iterable[int]) -> None:
        """Mark the nodes whose ids appear in the sorted ``exclusions`` as excluded.

        All other nodes are marked as included.
        """
        pending = iter(exclusions)
        upcoming = next(pending, None)
        for node_id, sender in enumerate(self.senders):
            if upcoming is not None and upcoming == node_id:
                sender.node.info.excluded = True
                upcoming = next(pending, None)
            else:
                sender.node.info.excluded = False

    @property
    def node_count(self) -> int:
        return len(self.nodes)