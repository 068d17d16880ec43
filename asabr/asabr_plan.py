"""Reader for contact plans written in the native token-based format."""

from __future__ import annotations

from typing import Any, Optional

from .contact import Contact, ContactInfo
from .node import Node, NodeInfo
from .node_manager import NoManagement
from .parsing import Dispatcher, Lexer, ParsingError, parse_components


class ContactPlanError(ParsingError):
    """Raised when a contact plan is malformed or inconsistent."""


class ASABRContactPlan:
    """Parses nodes and contacts while checking that node ids and names are unique.

    The plan remembers every node it has accepted, so parsing a second
    plan with the same instance rejects nodes already seen.
    """

    def __init__(self) -> None:
        self._known_node_ids: set[int] = set()
        self._known_node_names: set[str] = set()
        self._max_node_id_in_contacts = 0
        self._max_node_id_in_nodes = 0

    def _add_contact(self, contact: Contact, contacts: list[Contact]) -> None:
        highest = max(contact.tx_node, contact.rx_node)
        self._max_node_id_in_contacts = max(self._max_node_id_in_contacts, highest)
        contacts.append(contact)

    def _add_node(self, node: Node, nodes: list[Node]) -> None:
        if node.node_id in self._known_node_ids:
            raise ContactPlanError(f"Two nodes have the same id ({node.node_id})")
        if node.name in self._known_node_names:
            raise ContactPlanError(f"Two nodes have the same name ({node.name})")
        self._max_node_id_in_nodes = max(self._max_node_id_in_nodes, node.node_id)
        self._known_node_ids.add(node.node_id)
        self._known_node_names.add(node.name)
        nodes.append(node)

    def parse(
        self,
        lexer: Lexer,
        node_manager_type: Optional[Any] = NoManagement,
        contact_manager_type: Optional[Any] = None,
        node_marker_map: Optional[Dispatcher[Any]] = None,
        contact_marker_map: Optional[Dispatcher[Any]] = None,
    ) -> tuple[list[Node], list[Contact]]:
        """Read every ``node`` and ``contact`` element from ``lexer``.

        A manager type fixes the manager of every element of its kind and is
        built with its ``parse`` class method. Passing ``None`` instead makes
        each element name its manager with a marker, resolved through the
        matching marker map.

        Raises :class:`ContactPlanError` on any malformed or inconsistent input.
        """
        node_parser = node_manager_type.parse if node_manager_type is not None else None
        contact_parser = (
            contact_manager_type.parse if contact_manager_type is not None else None
        )
        nodes: list[Node] = []
        contacts: list[Contact] = []

        try:
            while (element := lexer.consume_next_token()) is not None:
                if element == "contact":
                    info, manager = parse_components(
                        lexer, ContactInfo.parse, contact_parser, contact_marker_map
                    )
                    contact = Contact.try_new(info, manager)
                    if contact is None:
                        raise ContactPlanError(
                            f"Malformed contact ({lexer.current_position})"
                        )
                    self._add_contact(contact, contacts)
                elif element == "node":
                    info, manager = parse_components(
                        lexer, NodeInfo.parse, node_parser, node_marker_map
                    )
                    self._add_node(Node.try_new(info, manager), nodes)
                else:
                    raise ContactPlanError(
                        f"Unrecognized CP element ({lexer.current_position})"
                    )
        except ContactPlanError:
            raise
        except ParsingError as exc:
            raise ContactPlanError(str(exc)) from exc

        if self._max_node_id_in_contacts != self._max_node_id_in_nodes:
            raise ContactPlanError(
                "The max node numbers for the contact and node definitions do not match"
            )
        if len(nodes) - 1 != self._max_node_id_in_contacts:
            raise ContactPlanError("Some node declarations are missing")
        return nodes, contacts