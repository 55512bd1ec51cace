import pytest

from api.roadmap_api.model import GraphStore
from conftest import CountingRenderer, MemoryStorage, ScriptedInput
from core.roadmap_platform.actions import (
    CanvasClick,
    ClearAll,
    ClearPath,
    DeleteKey,
    DeleteSelected,
    DragEnd,
    DragMove,
    DragStart,
    EdgeClick,
    LoadSeed,
    Mode,
    NodeClick,
    ResetView,
    RunShortestPath,
    SetMode,
)
from core.roadmap_platform.editor import EditorStateMachine


def make_editor(graph=None, answers=None, confirm=True):
    user_input = ScriptedInput(answers, confirm=confirm)
    storage = MemoryStorage()
    renderer = CountingRenderer()
    editor = EditorStateMachine(graph or GraphStore(), user_input, storage, renderer)
    return editor, user_input, storage, renderer


# -----------------
# ADD MODE
# -----------------

def test_canvas_click_adds_trimmed_city():
    editor, user_input, storage, renderer = make_editor(answers=["  Yangon  "])

    editor.dispatch(CanvasClick(120, 80))

    node = editor.graph.nodes[0]
    assert (node.name, node.x, node.y) == ("Yangon", 120, 80)
    assert user_input.prompts[0][1] == "City 1"
    assert storage.saves == 1
    assert len(renderer.views) == 1


@pytest.mark.parametrize("answer", [None, "", "   "])
def test_cancelled_or_blank_name_adds_nothing(answer):
    editor, _, storage, _ = make_editor(answers=[answer])

    editor.dispatch(CanvasClick(1, 1))

    assert editor.graph.nodes == []
    assert storage.saves == 0


def test_canvas_click_ignored_outside_add_mode():
    editor, user_input, _, _ = make_editor(answers=["X"])
    editor.dispatch(SetMode(Mode.SELECT))

    editor.dispatch(CanvasClick(1, 1))

    assert editor.graph.nodes == []
    assert user_input.prompts == []


# -----------------
# CONNECT MODE
# -----------------

def connect_editor(answers=None):
    graph = GraphStore()
    a = graph.add_node("A")
    b = graph.add_node("B")
    c = graph.add_node("C")
    editor, user_input, storage, renderer = make_editor(graph, answers)
    editor.dispatch(SetMode(Mode.CONNECT))
    return editor, user_input, storage, (a, b, c)


def test_first_click_sets_pending_source_and_selection():
    editor, user_input, storage, (a, _, _) = connect_editor()

    editor.dispatch(NodeClick(a))

    assert editor.pending_source == a
    assert editor.selected_node == a
    assert user_input.prompts == []
    assert storage.saves == 0


def test_clicking_source_again_keeps_it_selected():
    editor, user_input, _, (a, _, _) = connect_editor()
    editor.dispatch(NodeClick(a))

    editor.dispatch(NodeClick(a))

    assert editor.pending_source == a
    assert editor.selected_node == a
    assert user_input.prompts == []


def test_second_click_creates_weighted_road():
    editor, user_input, storage, (a, b, _) = connect_editor(answers=["12.5"])
    editor.dispatch(NodeClick(a))

    editor.dispatch(NodeClick(b))

    edge = editor.graph.edge_between(a, b)
    assert edge.weight == 12.5
    assert user_input.prompts[0][1] == "10"
    assert editor.pending_source is None
    assert editor.selected_node is None
    assert storage.saves == 1


@pytest.mark.parametrize("answer", [None, "abc", "0", "-4", "inf", "nan", ""])
def test_invalid_weight_aborts_connect_gesture(answer):
    editor, _, storage, (a, b, _) = connect_editor(answers=[answer])
    editor.dispatch(NodeClick(a))

    editor.dispatch(NodeClick(b))

    assert editor.graph.edges == []
    assert editor.pending_source is None
    assert editor.selected_node is None
    assert storage.saves == 1


def test_connecting_already_connected_cities_alerts():
    editor, user_input, _, (a, b, _) = connect_editor()
    editor.graph.add_edge(a, b, 3)
    editor.dispatch(NodeClick(b))

    editor.dispatch(NodeClick(a))

    assert user_input.alerts == ["Road already exists between these cities."]
    assert user_input.prompts == []
    assert len(editor.graph.edges) == 1
    assert editor.pending_source is None
    assert editor.selected_node is None


def test_mode_switch_clears_pending_but_keeps_graph_and_path(seed_graph):
    editor, _, _, _ = make_editor(seed_graph)
    editor.dispatch(RunShortestPath(1, 3))
    editor.dispatch(SetMode(Mode.CONNECT))
    editor.dispatch(NodeClick(1))

    editor.dispatch(SetMode(Mode.SELECT))

    assert editor.pending_source is None
    assert editor.selected_node is None
    assert editor.graph.path_result.edges == [6, 7]
    assert len(editor.graph.nodes) == 5


# -----------------
# SELECT MODE
# -----------------

def test_node_click_in_select_mode_selects(seed_graph):
    editor, _, storage, _ = make_editor(seed_graph)
    editor.dispatch(SetMode(Mode.SELECT))

    editor.dispatch(NodeClick(4))

    assert editor.selected_node == 4
    assert editor.pending_source is None
    assert len(seed_graph.edges) == 6
    assert storage.saves == 0


def test_edge_click_updates_weight(seed_graph):
    editor, user_input, storage, _ = make_editor(seed_graph, answers=[" 2 "])
    editor.dispatch(SetMode(Mode.SELECT))

    editor.dispatch(EdgeClick(7))

    assert seed_graph.get_edge(7).weight == 2
    message, default = user_input.prompts[0]
    assert "B - C" in message and default == "6"
    assert storage.saves == 1


def test_edge_click_delete_keyword_removes_road_and_path(seed_graph):
    editor, _, _, _ = make_editor(seed_graph, answers=["  DELETE "])
    editor.dispatch(RunShortestPath(1, 3))
    editor.dispatch(SetMode(Mode.SELECT))

    editor.dispatch(EdgeClick(6))

    assert seed_graph.get_edge(6) is None
    assert seed_graph.path_result is None


@pytest.mark.parametrize("answer", ["nope", "-1", "0"])
def test_edge_click_with_bad_input_leaves_road(seed_graph, answer):
    editor, _, storage, _ = make_editor(seed_graph, answers=[answer])
    editor.dispatch(SetMode(Mode.SELECT))

    editor.dispatch(EdgeClick(6))

    assert seed_graph.get_edge(6).weight == 8
    assert storage.saves == 1


def test_edge_click_cancel_does_not_save(seed_graph):
    editor, _, storage, _ = make_editor(seed_graph, answers=[None])
    editor.dispatch(SetMode(Mode.SELECT))

    editor.dispatch(EdgeClick(6))
    editor.dispatch(EdgeClick(999))

    assert seed_graph.get_edge(6).weight == 8
    assert storage.saves == 0


def test_drag_moves_node_live_and_saves_once(seed_graph):
    editor, _, storage, renderer = make_editor(seed_graph)
    editor.dispatch(SetMode(Mode.SELECT))
    frames_before = len(renderer.views)

    # Grab A (250, 220) ten pixels right of its centre
    editor.dispatch(DragStart(1, 260, 220))
    editor.dispatch(DragMove(300, 300))
    editor.dispatch(DragMove(310, 320))
    editor.dispatch(DragEnd())
    editor.dispatch(DragMove(0, 0))

    node = seed_graph.get_node(1)
    assert (node.x, node.y) == (300, 320)
    assert len(renderer.views) - frames_before == 2
    assert storage.saves == 1
    assert not editor.is_dragging


def test_drag_ignored_outside_select_mode(seed_graph):
    editor, _, storage, _ = make_editor(seed_graph)

    editor.dispatch(DragStart(1, 0, 0))
    editor.dispatch(DragMove(50, 50))
    editor.dispatch(DragEnd())

    assert (seed_graph.get_node(1).x, seed_graph.get_node(1).y) == (250, 220)
    assert storage.saves == 0


# -----------------
# DELETION
# -----------------

def test_delete_selected_cascades(seed_graph):
    editor, user_input, storage, _ = make_editor(seed_graph)
    editor.dispatch(SetMode(Mode.SELECT))
    editor.dispatch(NodeClick(2))

    editor.dispatch(DeleteSelected())

    assert user_input.confirms == ['Delete city "B" and its 3 road(s)?']
    assert seed_graph.get_node(2) is None
    assert {e.edge_id for e in seed_graph.edges} == {8, 9, 11}
    assert editor.selected_node is None
    assert storage.saves == 1


def test_delete_selected_declined_keeps_city(seed_graph):
    editor, _, _, _ = make_editor(seed_graph, confirm=False)
    editor.dispatch(SetMode(Mode.SELECT))
    editor.dispatch(NodeClick(2))

    editor.dispatch(DeleteSelected())

    assert seed_graph.get_node(2) is not None
    assert editor.selected_node == 2


def test_delete_without_selection_alerts(seed_graph):
    editor, user_input, _, _ = make_editor(seed_graph)

    editor.dispatch(DeleteSelected())

    assert user_input.alerts == ["Select a city first (Edit/Move mode), then delete."]
    assert len(seed_graph.nodes) == 5


def test_delete_key_only_in_select_mode(seed_graph):
    editor, user_input, _, _ = make_editor(seed_graph)
    editor.dispatch(NodeClick(3))

    editor.dispatch(DeleteKey())
    assert seed_graph.get_node(3) is not None

    editor.dispatch(SetMode(Mode.SELECT))
    editor.dispatch(NodeClick(3))
    editor.dispatch(DeleteKey())

    assert seed_graph.get_node(3) is None
    assert user_input.confirms == ['Delete city "C" and its connected roads?']


# -----------------
# SHORTEST PATH AND WHOLE MAP
# -----------------

def test_run_shortest_path_stores_result_and_alerts(seed_graph):
    editor, user_input, _, renderer = make_editor(seed_graph)

    editor.dispatch(RunShortestPath(1, 3))

    assert seed_graph.path_result.distance == 14
    assert renderer.views[-1].path_edges == {6, 7}
    assert user_input.alerts == ["Shortest distance: 14"]


@pytest.mark.parametrize("start,end", [(None, 3), (1, None), (2, 2), (1, 999)])
def test_run_shortest_path_requires_distinct_cities(seed_graph, start, end):
    editor, user_input, _, _ = make_editor(seed_graph)

    editor.dispatch(RunShortestPath(start, end))

    assert user_input.alerts == ["Choose distinct Start and End cities."]
    assert seed_graph.path_result is None


def test_run_shortest_path_reports_no_path():
    graph = GraphStore()
    a = graph.add_node("A")
    b = graph.add_node("B")
    editor, user_input, _, _ = make_editor(graph)

    editor.dispatch(RunShortestPath(a, b))

    assert user_input.alerts == ["No path exists between selected cities."]
    assert graph.path_result.edges == []


def test_clear_path_and_reset_view(seed_graph):
    editor, _, _, _ = make_editor(seed_graph)
    editor.dispatch(RunShortestPath(1, 3))
    editor.dispatch(NodeClick(2))

    editor.dispatch(ClearPath())
    editor.dispatch(ResetView())

    assert seed_graph.path_result is None
    assert editor.selected_node is None


def test_clear_all_requires_confirmation(seed_graph):
    editor, _, storage, _ = make_editor(seed_graph, confirm=False)
    editor.dispatch(ClearAll())
    assert len(seed_graph.nodes) == 5

    editor.input.confirm_answer = True
    editor.dispatch(ClearAll())

    assert seed_graph.nodes == [] and seed_graph.edges == []
    assert seed_graph.next_id == 1
    assert storage.saves == 1


def test_load_seed_replaces_map():
    editor, _, storage, _ = make_editor()
    editor.graph.add_node("Old")

    editor.dispatch(LoadSeed())

    assert [n.name for n in editor.graph.nodes] == ["A", "B", "C", "D", "E"]
    assert editor.graph.next_id == 12
    assert storage.record["nextId"] == 12


def test_unknown_action_is_rejected():
    editor, _, _, _ = make_editor()

    with pytest.raises(ValueError):
        editor.dispatch(object())


def test_snapshot_exposes_selection(seed_graph):
    editor, _, _, _ = make_editor(seed_graph)
    editor.dispatch(SetMode(Mode.CONNECT))
    editor.dispatch(NodeClick(5))

    view = editor.snapshot()

    assert view.selected_node == 5
    assert view.pending_source == 5
    assert view.mode == "connect"
    assert view.stats == "5 cities, 6 roads"
