from asabr.contact import Contact, ContactInfo
from asabr.multigraph import Multigraph, Receiver
from asabr.node import Node, NodeInfo
from asabr.node_manager import NoManagement


class FakeManager:
    def try_init(self, info):
        return True


def make_nodes(count):
    return [Node(NodeInfo(i, f"n{i}"), NoManagement()) for i in reversed(range(count))]


def make_contact(tx, rx, start, end):
    return Contact(ContactInfo(tx, rx, start, end), FakeManager())


def build():
    contacts = [
        make_contact(0, 1, 20.0, 30.0),
        make_contact(0, 2, 0.0, 10.0),
        make_contact(0, 1, 0.0, 10.0),
        make_contact(1, 2, 5.0, 15.0),
        make_contact(0, 1, 10.0, 15.0),
    ]
    return Multigraph(make_nodes(3), contacts)


def test_senders_indexed_by_node_id():
    graph = build()
    assert graph.node_count == 3
    assert [s.node.node_id for s in graph.senders] == [0, 1, 2]
    assert [n.node_id for n in graph.nodes] == [0, 1, 2]


def test_receivers_grouped_and_ordered():
    graph = build()
    sender0 = graph.senders[0]
    assert [r.node.node_id for r in sender0.receivers] == [2, 1]
    to_1 = sender0.receivers[1]
    assert [c.info.start for c in to_1.contacts_to_receiver] == [0.0, 10.0, 20.0]
    assert all(c.tx_node == 0 and c.rx_node == 1 for c in to_1.contacts_to_receiver)
    assert [r.node.node_id for r in graph.senders[1].receivers] == [2]
    assert graph.senders[2].receivers == []


def test_receivers_share_node_objects():
    graph = build()
    assert graph.senders[0].receivers[0].node is graph.nodes[2]
    assert graph.senders[1].receivers[0].node is graph.senders[2].node


def test_every_contact_placed_once():
    graph = build()
    total = sum(
        len(r.contacts_to_receiver) for s in graph.senders for r in s.receivers
    )
    assert total == 5


def test_lazy_prune():
    graph = build()
    receiver = graph.senders[0].receivers[1]
    assert receiver.lazy_prune_and_get_first_idx(0.0) == 0
    assert receiver.lazy_prune_and_get_first_idx(12.0) == 1
    assert receiver.next == 1
    assert receiver.lazy_prune_and_get_first_idx(15.0) == 2
    assert receiver.lazy_prune_and_get_first_idx(30.0) is None
    assert receiver.next == 2


def test_lazy_prune_never_goes_back():
    node = Node(NodeInfo(0, "n0"), NoManagement())
    receiver = Receiver(node, [make_contact(1, 0, 0.0, 10.0), make_contact(1, 0, 20.0, 30.0)])
    assert receiver.lazy_prune_and_get_first_idx(12.0) == 1
    assert receiver.lazy_prune_and_get_first_idx(0.0) == 1


def test_apply_exclusions_sorted():
    graph = build()
    graph.apply_exclusions_sorted([0, 2])
    assert [n.info.excluded for n in graph.nodes] == [True, False, True]
    assert graph.senders[0].receivers[0].is_excluded
    assert not graph.senders[0].receivers[1].is_excluded
    graph.apply_exclusions_sorted([1])
    assert [n.info.excluded for n in graph.nodes] == [False, True, False]
    graph.apply_exclusions_sorted([])
    assert not any(n.info.excluded for n in graph.nodes)