import math

import numpy as np
import pytest

from tilepath.graph import TileGraph, build_graph, build_graph_from_mask


GRIDS = [
    (4, 3, set()),
    (5, 5, {(1, 1), (2, 2), (3, 3)}),
    (6, 4, {(0, 0), (5, 3), (2, 1), (2, 2), (3, 1)}),
    (1, 1, {(0, 0)}),
    (0, 0, set()),
]


def adjacent(a, b, diagonal):
    dx, dy = abs(a[0] - b[0]), abs(a[1] - b[1])
    if diagonal:
        return max(dx, dy) == 1
    return dx + dy == 1


def test_tile_id_is_row_major():
    graph = TileGraph(4, 3)
    assert graph.tile_id(0, 0) == 0
    assert graph.tile_id(3, 0) == 3
    assert graph.tile_id(0, 1) == 4
    assert graph.tile_id(2, 2) == 10
    assert graph.tile_of(10) == (2, 2)


def test_tile_ids_are_unique():
    graph = TileGraph(7, 5)
    ids = {graph.tile_id(x, y) for y in range(5) for x in range(7)}
    assert len(ids) == 35


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        build_graph(-1, 3, set())


@pytest.mark.parametrize("width,height,walls", GRIDS)
@pytest.mark.parametrize("diagonal", [False, True])
def test_nodes_match_walkable_tiles(width, height, walls, diagonal):
    graph = build_graph(width, height, walls, diagonal=diagonal)
    registered = {graph.point_position(i) for i in graph.point_ids()}
    walkable = {
        (x, y)
        for y in range(height)
        for x in range(width)
        if (x, y) not in walls
    }
    assert registered == walkable
    for i in graph.point_ids():
        assert graph.tile_id(*graph.point_position(i)) == i


@pytest.mark.parametrize("width,height,walls", GRIDS)
@pytest.mark.parametrize("diagonal", [False, True])
def test_edges_join_adjacent_walkable_tiles(width, height, walls, diagonal):
    graph = build_graph(width, height, walls, diagonal=diagonal)
    for a in graph.point_ids():
        pa = graph.point_position(a)
        for b, weight in graph.neighbors(a):
            pb = graph.point_position(b)
            assert a != b
            assert pa not in walls and pb not in walls
            assert adjacent(pa, pb, diagonal)
            expected = 1.0 if pa[0] == pb[0] or pa[1] == pb[1] else math.sqrt(2)
            assert math.isclose(weight, expected)
            # Undirected: the reverse edge exists with the same weight
            assert graph.edge_weight(b, a) == weight


def test_open_grid_edge_counts():
    # 3x3: 12 orthogonal edges, plus 8 diagonal ones
    assert build_graph(3, 3, set()).edge_count == 12
    assert build_graph(3, 3, set(), diagonal=True).edge_count == 20


def test_diagonal_corner_cutting_is_permissive_by_default():
    # Diagonal gap between two blocking tiles
    walls = {(1, 0), (0, 1)}
    graph = build_graph(2, 2, walls, diagonal=True)
    assert graph.are_connected(graph.tile_id(0, 0), graph.tile_id(1, 1))


def test_diagonal_corner_cutting_can_be_forbidden():
    walls = {(1, 0)}
    graph = build_graph(2, 2, walls, diagonal=True, corner_cutting=False)
    assert not graph.are_connected(graph.tile_id(0, 0), graph.tile_id(1, 1))
    # Orthogonal links are unaffected
    assert graph.are_connected(graph.tile_id(0, 0), graph.tile_id(0, 1))
    assert graph.are_connected(graph.tile_id(0, 1), graph.tile_id(1, 1))


def test_build_does_not_mutate_walls():
    walls = {(1, 1)}
    build_graph(3, 3, walls, diagonal=True)
    assert walls == {(1, 1)}


def test_connect_points_ignores_duplicates_and_self_edges():
    graph = TileGraph(2, 1)
    graph.add_point(0, (0, 0))
    graph.add_point(1, (1, 0))
    graph.connect_points(0, 1, 1.0)
    graph.connect_points(1, 0, 1.0)
    graph.connect_points(0, 0, 1.0)
    assert graph.neighbors(0) == [(1, 1.0)]
    assert graph.neighbors(1) == [(0, 1.0)]
    assert graph.edge_count == 1


def test_connect_points_requires_registered_points():
    graph = TileGraph(2, 1)
    graph.add_point(0, (0, 0))
    with pytest.raises(KeyError):
        graph.connect_points(0, 1, 1.0)


def test_is_walkable_respects_bounds():
    graph = build_graph(2, 2, {(1, 1)})
    assert graph.is_walkable(0, 0)
    assert not graph.is_walkable(1, 1)
    assert not graph.is_walkable(-1, 0)
    assert not graph.is_walkable(2, 0)
    # x overflow must not alias onto the next row
    assert not graph.is_walkable(2, 0) and graph.has_point(graph.tile_id(2, 0))


def test_build_from_mask_matches_build_from_set():
    mask = np.array(
        [
            [True, True, False],
            [False, True, True],
        ]
    )
    graph = build_graph_from_mask(mask, diagonal=True)
    reference = build_graph(3, 2, {(2, 0), (0, 1)}, diagonal=True)
    assert graph.width == 3 and graph.height == 2
    assert sorted(graph.point_ids()) == sorted(reference.point_ids())
    assert graph.edge_count == reference.edge_count


def test_build_from_mask_rejects_non_2d():
    with pytest.raises(ValueError):
        build_graph_from_mask(np.ones(4, dtype=bool))


def test_tile_of_on_zero_width_grid():
    graph = TileGraph(0, 3)
    with pytest.raises(ValueError):
        graph.tile_of(0)
