"""Reader for ION-style contact plans made of ``a contact`` and ``a range`` lines."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Union

from .contact import Contact, ContactInfo
from .contact_manager import BasicVolumeManager
from .node import Node, NodeInfo
from .node_manager import NoManagement
from .segmentation import Segment, SegmentationManager


@dataclass
class IONContactData:
    """A contact as described by an ION plan, with the delay of its range."""

    tx_start: float
    tx_end: float
    tx_node: int
    rx_node: int
    data_rate: float
    delay: float = 0.0
    confidence: float = 1.0

    @property
    def contact_info(self) -> ContactInfo:
        return ContactInfo(self.tx_node, self.rx_node, self.tx_start, self.tx_end)


@dataclass
class _IONRange:
    tx_start: float
    tx_end: float
    tx_node: int
    rx_node: int
    delay: float


def _build_manager(manager_type: Any, data: IONContactData) -> Any:
    if issubclass(manager_type, SegmentationManager):
        return manager_type(
            rate_intervals=[Segment(data.tx_start, data.tx_end, data.data_rate)],
            delay_intervals=[Segment(data.tx_start, data.tx_end, data.delay)],
        )
    if issubclass(manager_type, BasicVolumeManager):
        return manager_type(data.data_rate, data.delay)
    raise TypeError(f"Unsupported contact manager type: {manager_type!r}")


def _build_contact(data: IONContactData, manager_type: Any) -> Contact:
    contact = Contact.try_new(data.contact_info, _build_manager(manager_type, data))
    if contact is None:
        raise ValueError(f"Invalid contact from {data.tx_start} to {data.tx_end}")
    return contact


def parse_ion_file(
    path: Union[str, os.PathLike], manager_type: Any
) -> tuple[list[Node], list[Contact]]:
    """Read an ION contact plan and build nodes and contacts.

    Node names are mapped to ids in order of first appearance. Every contact
    must lie within exactly one range of the same node pair, which supplies
    its delay. Raises :class:`ValueError` on malformed input and
    :class:`TypeError` for an unsupported ``manager_type``.
    """
    aliases: dict[str, int] = {}
    nodes: list[Node] = []
    ranges: list[_IONRange] = []
    contact_map: dict[tuple[int, int], list[IONContactData]] = {}
    contact_count = 0

    def node_id(name: str) -> int:
        if name not in aliases:
            aliases[name] = len(aliases)
            nodes.append(Node.try_new(NodeInfo(id=aliases[name], name=name), NoManagement()))
        return aliases[name]

    with open(path, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if line.lstrip().startswith("#"):
                continue
            words = line.split()
            if not words or words[0] != "a":
                continue
            if len(words) < 2:
                raise ValueError(f"Incomplete command on line {line_number}")
            kind = words[1]
            if kind not in ("contact", "range"):
                continue
            if len(words) < 7:
                raise ValueError(f"Incomplete {kind} on line {line_number}")
            try:
                start = float(words[2])
                end = float(words[3])
                value = float(words[6])
                confidence = float(words[7]) if len(words) >= 8 else 1.0
            except ValueError as exc:
                raise ValueError(f"Invalid number on line {line_number}") from exc
            tx_node = node_id(words[4])
            rx_node = node_id(words[5])
            if kind == "contact":
                contact_count += 1
                contact_map.setdefault((tx_node, rx_node), []).append(
                    IONContactData(
                        tx_start=start,
                        tx_end=end,
                        tx_node=tx_node,
                        rx_node=rx_node,
                        data_rate=value,
                        confidence=confidence,
                    )
                )
            else:
                ranges.append(_IONRange(start, end, tx_node, rx_node, value))

    for pair_contacts in contact_map.values():
        pair_contacts.sort(key=lambda data: data.tx_start)

    contacts: list[Contact] = []
    for rng in ranges:
        for data in contact_map.get((rng.tx_node, rng.rx_node), []):
            if not (rng.tx_start <= data.tx_start and data.tx_end <= rng.tx_end):
                raise ValueError("This parser only supports one range per contact")
            data.delay = rng.delay
            contacts.append(_build_contact(data, manager_type))

    if len(contacts) != contact_count:
        raise ValueError("At least one contact has no range")
    return nodes, contacts