import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from nurbsobj.io.surface import decode_surface, encode_surface
from nurbsobj.model.errors import (
    MalformedDirectiveError,
    MissingDirectiveError,
    StructuralMismatchError,
)
from nurbsobj.model.records import SurfaceRecord

from conftest import obj_lines

PATCH = """
    v 0 0 0
    v 1 0 0
    v 0 1 0
    v 1 1 1 2
    cstype rat bspline
    deg 1 1
    surf 0 1 0 1 1 2 3 4
    parm u 0 0 1 1
    parm v 0 0 1 1
    end
"""


def test_indices_fill_grid_u_fastest():
    record = decode_surface(obj_lines(PATCH))

    assert (record.degree_u, record.degree_v) == (1, 1)
    assert record.rational is True
    assert record.shape == (2, 2)
    assert_array_equal(record.control_points[0, 0], [0, 0, 0])
    assert_array_equal(record.control_points[1, 0], [1, 0, 0])
    assert_array_equal(record.control_points[0, 1], [0, 1, 0])
    assert_array_equal(record.control_points[1, 1], [1, 1, 1])
    assert_array_equal(record.weights, [[1.0, 1.0], [1.0, 2.0]])


def test_first_blank_line_terminates_a_surface():
    text = PATCH.replace("    parm u", "\n    parm u")
    with pytest.raises(MissingDirectiveError) as exc:
        decode_surface(obj_lines(text))
    assert exc.value.directive == "parm"


def test_continuation_in_surf_and_parm():
    record = decode_surface(obj_lines("""
        v 0 0 0
        v 1 0 0
        v 0 1 0
        v 1 1 1
        cstype bspline
        deg 1 1
        surf 0 1 0 1 \\
        1 2 \\
        3 4
        parm u 0 0 \\
        1 1
        parm v 0 0 1 1
        end
    """))
    assert record.rational is False
    assert_array_equal(record.knots_u, [0, 0, 1, 1])
    assert_array_equal(record.control_points[1, 1], [1, 1, 1])


def test_missing_surf_fails():
    lines = obj_lines(PATCH.replace("surf 0 1 0 1 1 2 3 4\n", ""))
    with pytest.raises(MissingDirectiveError) as exc:
        decode_surface(lines)
    assert exc.value.directive == "surf"


def test_curv_does_not_stand_in_for_surf():
    lines = obj_lines(PATCH.replace("surf 0 1 0 1", "curv 0 1"))
    with pytest.raises(MissingDirectiveError) as exc:
        decode_surface(lines)
    assert exc.value.directive == "surf"


def test_missing_v_knots_is_a_structural_mismatch():
    lines = obj_lines(PATCH.replace("parm v 0 0 1 1\n", ""))
    with pytest.raises(StructuralMismatchError):
        decode_surface(lines)


def test_index_count_must_match_grid():
    lines = obj_lines(PATCH.replace("surf 0 1 0 1 1 2 3 4", "surf 0 1 0 1 1 2 3"))
    with pytest.raises(StructuralMismatchError, match="imply 4 control points"):
        decode_surface(lines)


def test_out_of_range_index_fails():
    lines = obj_lines(PATCH.replace("surf 0 1 0 1 1 2 3 4", "surf 0 1 0 1 1 2 3 5"))
    with pytest.raises(StructuralMismatchError, match="out of range"):
        decode_surface(lines)


@pytest.mark.parametrize("bad_line", ["deg 1", "surf 0 1 0"])
def test_malformed_fields_fail(bad_line):
    text = PATCH.replace("end\n", f"{bad_line}\n    end\n")
    with pytest.raises(MalformedDirectiveError):
        decode_surface(obj_lines(text))


def test_encode_traverses_u_fastest():
    grid = np.zeros((2, 2, 3))
    for i in range(2):
        for j in range(2):
            grid[i, j] = [i, j, 0.0]
    record = SurfaceRecord(
        degree_u=1,
        degree_v=1,
        knots_u=np.array([0.0, 0.0, 1.0, 1.0]),
        knots_v=np.array([0.0, 0.0, 1.0, 1.0]),
        control_points=grid,
        weights=np.ones((2, 2)),
    )
    lines = list(encode_surface(record))

    assert lines == [
        "v 0.0 0.0 0.0 1.0",
        "v 1.0 0.0 0.0 1.0",
        "v 0.0 1.0 0.0 1.0",
        "v 1.0 1.0 0.0 1.0",
        "cstype bspline",
        "deg 1 1",
        "surf 0.0 1.0 0.0 1.0 1 2 3 4",
        "parm u 0.0 0.0 1.0 1.0",
        "parm v 0.0 0.0 1.0 1.0",
        "end",
    ]


def test_empty_grid_encodes_nothing(caplog):
    record = SurfaceRecord(degree_u=1, degree_v=1)
    with caplog.at_level("WARNING", logger="nurbsobj"):
        assert list(encode_surface(record)) == []
    assert "empty control point grid" in caplog.text


def test_round_trip_non_square_grid(bilinear_patch):
    record = SurfaceRecord(rational=True, **bilinear_patch)
    lines = list(encode_surface(record))
    assert "surf 0.0 1.0 0.0 2.0 1 2 3 4 5 6" in lines

    decoded = decode_surface(lines)
    assert (decoded.degree_u, decoded.degree_v) == (2, 1)
    assert decoded.shape == (3, 2)
    assert_allclose(decoded.knots_u, record.knots_u)
    assert_allclose(decoded.knots_v, record.knots_v)
    assert_allclose(decoded.control_points, record.control_points)
    assert_allclose(decoded.weights, record.weights)


def test_encode_rejects_mismatched_weight_grid(bilinear_patch):
    record = SurfaceRecord(rational=True, **dict(bilinear_patch, weights=np.ones(6)))
    with pytest.raises(StructuralMismatchError, match="3x2"):
        list(encode_surface(record))


def test_encode_rejects_empty_knot_vector(bilinear_patch):
    record = SurfaceRecord(**dict(bilinear_patch, knots_v=np.empty(0)))
    with pytest.raises(StructuralMismatchError):
        list(encode_surface(record))
