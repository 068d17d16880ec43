import pytest

from asabr.asabr_plan import ASABRContactPlan, ContactPlanError
from asabr.contact_manager import EVLManager
from asabr.file_lexer import FileLexer
from asabr.node_manager import NoManagement
from asabr.parsing import Dispatcher, ParsingError
from asabr.segmentation import SegmentationManager

STATIC_PLAN = """\
# three nodes
node 0 alpha
node 1 beta
node 2 gamma

contact 0 1 0 100 10 1
contact 1 2 50 150 20 2
"""

DYNAMIC_PLAN = """\
node 0 alpha none
node 1 beta none
contact 0 1 0 100 evl 10 1
contact 1 0 0 100 seg rate 0 100 5 delay 0 100 1
"""


def _write(tmp_path, text):
    path = tmp_path / "plan.cp"
    path.write_text(text)
    return path


def _parse(tmp_path, text, plan=None, **kwargs):
    path = _write(tmp_path, text)
    plan = plan or ASABRContactPlan()
    with FileLexer(path) as lexer:
        return plan.parse(lexer, **kwargs)


def _dispatchers():
    nodes = Dispatcher()
    nodes.add("none", NoManagement.parse)
    contacts = Dispatcher()
    contacts.add("evl", EVLManager.parse)
    contacts.add("seg", SegmentationManager.parse)
    return nodes, contacts


def test_static_managers(tmp_path):
    nodes, contacts = _parse(
        tmp_path, STATIC_PLAN, node_manager_type=NoManagement, contact_manager_type=EVLManager
    )
    assert [n.node_id for n in nodes] == [0, 1, 2]
    assert [n.name for n in nodes] == ["alpha", "beta", "gamma"]
    assert all(isinstance(n.manager, NoManagement) for n in nodes)
    assert [(c.tx_node, c.rx_node) for c in contacts] == [(0, 1), (1, 2)]
    assert contacts[1].info.start == 50.0
    assert contacts[1].info.end == 150.0
    assert isinstance(contacts[0].manager, EVLManager)
    assert contacts[0].manager.rate == 10.0
    assert contacts[1].manager.delay == 2.0


def test_dynamic_managers(tmp_path):
    node_map, contact_map = _dispatchers()
    nodes, contacts = _parse(
        tmp_path,
        DYNAMIC_PLAN,
        node_manager_type=None,
        contact_manager_type=None,
        node_marker_map=node_map,
        contact_marker_map=contact_map,
    )
    assert len(nodes) == 2
    assert isinstance(contacts[0].manager, EVLManager)
    assert isinstance(contacts[1].manager, SegmentationManager)
    assert contacts[1].manager.rate_intervals[0].val == 5.0


def test_dynamic_without_map(tmp_path):
    with pytest.raises(ContactPlanError, match="requires a map"):
        _parse(tmp_path, DYNAMIC_PLAN, node_manager_type=None, contact_manager_type=None)


def test_unrecognized_marker(tmp_path):
    node_map, contact_map = _dispatchers()
    text = "node 0 alpha none\ncontact 0 0 0 10 bogus 1 1\n"
    with pytest.raises(ContactPlanError, match="Unrecognized marker"):
        _parse(
            tmp_path,
            text,
            node_manager_type=None,
            node_marker_map=node_map,
            contact_marker_map=contact_map,
        )


def test_unrecognized_element(tmp_path):
    with pytest.raises(ContactPlanError, match="Unrecognized CP element"):
        _parse(tmp_path, "link 0 1\n", contact_manager_type=EVLManager)


def test_duplicate_node_id(tmp_path):
    with pytest.raises(ContactPlanError, match="same id"):
        _parse(tmp_path, "node 0 alpha\nnode 0 beta\n", contact_manager_type=EVLManager)


def test_duplicate_node_name(tmp_path):
    with pytest.raises(ContactPlanError, match="alpha"):
        _parse(tmp_path, "node 0 alpha\nnode 1 alpha\n", contact_manager_type=EVLManager)


def test_malformed_contact_window(tmp_path):
    text = "node 0 alpha\nnode 1 beta\ncontact 0 1 100 100 10 1\n"
    with pytest.raises(ContactPlanError, match="Malformed contact"):
        _parse(tmp_path, text, contact_manager_type=EVLManager)


def test_malformed_segmented_contact(tmp_path):
    node_map, contact_map = _dispatchers()
    text = "node 0 alpha none\nnode 1 beta none\ncontact 0 1 0 100 seg rate 0 50 5 delay 0 100 1\n"
    with pytest.raises(ContactPlanError, match="Malformed contact"):
        _parse(
            tmp_path,
            text,
            node_manager_type=None,
            node_marker_map=node_map,
            contact_marker_map=contact_map,
        )


def test_truncated_contact(tmp_path):
    with pytest.raises(ContactPlanError, match="Parsing failed") as info:
        _parse(tmp_path, "node 0 alpha\ncontact 0 1 0\n", contact_manager_type=EVLManager)
    assert isinstance(info.value, ParsingError)


def test_max_ids_mismatch(tmp_path):
    text = "node 0 alpha\nnode 1 beta\nnode 2 gamma\ncontact 0 1 0 100 10 1\n"
    with pytest.raises(ContactPlanError, match="do not match"):
        _parse(tmp_path, text, contact_manager_type=EVLManager)


def test_missing_node_declaration(tmp_path):
    text = "node 0 alpha\nnode 2 gamma\ncontact 0 2 0 100 10 1\n"
    with pytest.raises(ContactPlanError, match="missing"):
        _parse(tmp_path, text, contact_manager_type=EVLManager)


def test_empty_plan(tmp_path):
    with pytest.raises(ContactPlanError, match="missing"):
        _parse(tmp_path, "# nothing here\n", contact_manager_type=EVLManager)


def test_plan_remembers_nodes(tmp_path):
    plan = ASABRContactPlan()
    nodes, _ = _parse(tmp_path, STATIC_PLAN, plan=plan, contact_manager_type=EVLManager)
    assert len(nodes) == 3
    with pytest.raises(ContactPlanError, match="same id"):
        _parse(tmp_path, STATIC_PLAN, plan=plan, contact_manager_type=EVLManager)