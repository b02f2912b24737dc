import pytest

from algorithms.graphs import GraphInput, bfs, dfs
from algorithms.graphs.bfs import reference as bfs_reference
from algorithms.graphs.dfs import reference as dfs_reference
from graph import Graph, get_preset


def final_path(steps):
    return list(steps[-1].state.path)


def test_bfs_visits_tree_level_by_level(tree_graph):
    steps = list(bfs.bfs(tree_graph, "A"))
    assert final_path(steps) == ["A", "B", "C", "D", "E", "F"]


def test_dfs_visits_tree_depth_first(tree_graph):
    steps = list(dfs.dfs(tree_graph, "A"))
    assert final_path(steps) == ["A", "B", "D", "E", "C", "F"]


@pytest.mark.parametrize("generate,reference", [(bfs.bfs, bfs_reference), (dfs.dfs, dfs_reference)])
@pytest.mark.parametrize("preset,start", [("tree", "A"), ("cycle", "C"), ("simple-path", "D"), ("grid", "1,1")])
def test_traversals_match_reference(generate, reference, preset, start):
    g = get_preset(preset)
    steps = list(generate(g, start))
    assert final_path(steps) == reference(GraphInput(g, start))
    assert sorted(final_path(steps)) == sorted(g.node_ids())
    assert [s.index for s in steps] == list(range(len(steps)))


@pytest.mark.parametrize("generate", [bfs.bfs, dfs.dfs])
def test_random_graphs_match_reference(generate):
    reference = bfs_reference if generate is bfs.bfs else dfs_reference
    for seed in range(5):
        g = Graph.generate_random(num_nodes=8, edge_probability=0.3, seed=seed)
        assert final_path(list(generate(g, "0"))) == reference(GraphInput(g, "0"))


@pytest.mark.parametrize("generate", [bfs.bfs, dfs.dfs])
def test_unknown_start_node_yields_initial_and_terminal_step(generate, tree_graph):
    steps = list(generate(tree_graph, "Z"))
    assert len(steps) == 2
    assert steps[-1].state.visited_nodes == ()


@pytest.mark.parametrize("generate", [bfs.bfs, dfs.dfs])
def test_non_graph_input_is_treated_as_empty(generate):
    steps = list(generate({"nodes": []}, "A"))
    assert len(steps) == 2
    assert steps[-1].state.graph.node_count() == 0


@pytest.mark.parametrize("generate", [bfs.bfs, dfs.dfs])
def test_unreachable_nodes_are_not_visited(generate):
    g = Graph()
    g.create_edge("A", "B")
    g.create_node("lonely")
    assert final_path(list(generate(g, "A"))) == ["A", "B"]


def test_directed_edges_are_followed_one_way():
    g = Graph(directed=True)
    g.create_edge("A", "B")
    g.create_edge("C", "A")
    assert final_path(list(bfs.bfs(g, "A"))) == ["A", "B"]


def test_visited_set_only_grows(tree_graph):
    steps = list(bfs.bfs(tree_graph, "A"))
    for prev, cur in zip(steps, steps[1:]):
        assert set(prev.state.visited_nodes) <= set(cur.state.visited_nodes)


def test_bfs_discover_steps_carry_exploring_edge(tree_graph):
    steps = list(bfs.bfs(tree_graph, "A"))
    edges = [s.state.exploring_edge for s in steps if s.state.exploring_edge]
    assert edges == [("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "F")]


def test_dfs_emits_skip_step_for_revisited_node():
    g = get_preset("cycle")
    steps = list(dfs.dfs(g, "A"))
    assert any("already visited" in s.description for s in steps)


def test_generators_do_not_touch_caller_graph(tree_graph):
    before = tree_graph.to_dict()
    steps = list(bfs.bfs(tree_graph, "A"))
    tree_graph.create_edge("F", "G")
    assert tree_graph.to_dict() != before
    assert steps[-1].state.graph.to_dict() == before


@pytest.mark.parametrize("run", [bfs.bfs, dfs.dfs])
def test_snapshot_graph_is_read_only(run, tree_graph):
    steps = list(run(tree_graph, "A"))
    with pytest.raises(TypeError):
        steps[0].state.graph.create_edge("F", "G")
    assert all(s.state.graph.is_frozen for s in steps)
    assert not steps[-1].state.graph.has_node("G")
