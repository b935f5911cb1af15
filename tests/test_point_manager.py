import numpy as np
import pytest

from boundary import Boundary
from point_manager import PointManager, PointRef


def test_add_point_returns_live_handle():
    pm = PointManager(initial_capacity=4)
    ref = pm.add_point(3.5, 7.25, payload=(255, 60, 0))
    assert isinstance(ref, PointRef)
    assert (ref.x, ref.y, ref.payload) == (3.5, 7.25, (255, 60, 0))
    assert isinstance(ref.x, float)
    assert len(pm) == 1
    assert pm[0] is ref


def test_growth_keeps_existing_positions(capsys):
    pm = PointManager(initial_capacity=2)
    refs = [pm.add_point(i, 2 * i) for i in range(5)]
    assert pm.capacity == 8
    assert [(r.x, r.y) for r in refs] == [(i, 2 * i) for i in range(5)]
    assert pm.positions.shape == (5, 2)
    assert "PointManager growing from 2 to 4" in capsys.readouterr().out


def test_from_array_and_payloads():
    pm = PointManager.from_array([[1, 2], [3, 4]], payloads=["a", "b"])
    assert len(pm) == 2
    assert [r.payload for r in pm] == ["a", "b"]
    assert (pm[1].x, pm[1].y) == (3.0, 4.0)
    pm.add_point(5, 6)
    assert len(pm) == 3


def test_from_array_validates_shape_and_payloads():
    with pytest.raises(ValueError):
        PointManager.from_array(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        PointManager.from_array(np.zeros((3, 2)), payloads=[1, 2])


def test_from_empty_array():
    pm = PointManager.from_array(np.zeros((0, 2)))
    assert len(pm) == 0
    assert pm.indices_in_rect(Boundary(0, 0, 1, 1)).size == 0


def test_set_position_moves_the_point():
    pm = PointManager()
    ref = pm.add_point(1, 1)
    pm.set_position(0, 8, 9)
    assert (ref.x, ref.y) == (8.0, 9.0)
    with pytest.raises(IndexError):
        pm.set_position(1, 0, 0)


def test_refs_compare_by_manager_and_index():
    a = PointManager.from_array([[1, 1], [2, 2]])
    b = PointManager.from_array([[1, 1], [2, 2]])
    assert a[0] == PointRef(a, 0)
    assert a[0] != a[1]
    assert a[0] != b[0]
    assert len({a[0], PointRef(a, 0), a[1]}) == 2


def test_linear_scans_use_closed_bounds():
    pm = PointManager.from_array([[0, 0], [10, 10], [5, 5], [10.5, 5], [3, 4]])
    assert pm.indices_in_rect(Boundary(0, 0, 10, 10)).tolist() == [0, 1, 2, 4]
    assert pm.indices_in_radius(0, 0, 5).tolist() == [0, 4]


def test_build_quadtree_inserts_every_point(uniform_points):
    tree = uniform_points.build_quadtree(Boundary.from_size(1000, 600), capacity=8)
    assert len(tree) == len(uniform_points)
    assert tree.capacity == 8
    assert tree.points == uniform_points.refs[:8]
