"""Reader for time-varying graph contact plans stored as JSON."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Union

from .contact import Contact, ContactInfo
from .contact_manager import BasicVolumeManager
from .node import Node, NodeInfo
from .node_manager import NoManagement
from .segmentation import Segment, SegmentationManager


@dataclass
class TVGUtilContactData:
    """A contact as described by a time-varying graph file."""

    tx_start: float
    tx_end: float
    tx_node: int
    rx_node: int
    delay: float
    data_rate: float
    confidence: float = 1.0

    @property
    def contact_info(self) -> ContactInfo:
        return ContactInfo(self.tx_node, self.rx_node, self.tx_start, self.tx_end)


def _build_manager(manager_type: Any, data: TVGUtilContactData) -> Any:
    if issubclass(manager_type, SegmentationManager):
        return manager_type(
            rate_intervals=[Segment(data.tx_start, data.tx_end, data.data_rate)],
            delay_intervals=[Segment(data.tx_start, data.tx_end, data.delay)],
        )
    if issubclass(manager_type, BasicVolumeManager):
        return manager_type(data.data_rate, data.delay)
    raise TypeError(f"Unsupported contact manager type: {manager_type!r}")


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    return float(value)


def _read_contact(entry: Any, tx_node: int, rx_node: int) -> TVGUtilContactData:
    characteristics = entry[4][0]
    rate_and_delay = characteristics[2][0]
    return TVGUtilContactData(
        tx_start=_number(entry[2]),
        tx_end=_number(entry[3]),
        tx_node=tx_node,
        rx_node=rx_node,
        delay=_number(rate_and_delay[2]),
        data_rate=_number(rate_and_delay[1]),
        confidence=_number(characteristics[1]),
    )


def parse_tvgutil_file(
    path: Union[str, os.PathLike], manager_type: Any
) -> tuple[list[Node], list[Contact]]:
    """Read a JSON time-varying graph and build nodes and contacts.

    Vertices receive ids in sorted name order. Raises :class:`ValueError`
    on malformed input and :class:`TypeError` for an unsupported
    ``manager_type``.
    """
    with open(path, encoding="utf-8") as handle:
        document = json.load(handle)

    try:
        vertices = document["vertices"]
        if not isinstance(vertices, dict):
            raise TypeError("vertices must be an object")
        ids = {name: node_id for node_id, name in enumerate(sorted(vertices))}
        nodes = [
            Node.try_new(NodeInfo(id=node_id, name=name), NoManagement())
            for name, node_id in ids.items()
        ]

        records: list[TVGUtilContactData] = []
        for edge in document["edges"]:
            tx_name, rx_name = edge["vertices"][0], edge["vertices"][1]
            tx_node, rx_node = ids[tx_name], ids[rx_name]
            records.extend(
                _read_contact(entry, tx_node, rx_node) for entry in edge["contacts"]
            )
    except (KeyError, IndexError, TypeError) as exc:
        raise ValueError(f"Malformed time-varying graph file: {exc}") from exc

    contacts: list[Contact] = []
    for data in records:
        contact = Contact.try_new(data.contact_info, _build_manager(manager_type, data))
        if contact is None:
            raise ValueError(f"Invalid contact from {data.tx_start} to {data.tx_end}")
        contacts.append(contact)
    return nodes, contacts