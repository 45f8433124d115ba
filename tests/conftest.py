from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import numpy as np
import pytest


@pytest.fixture
def write_obj(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dedented OBJ text to a file under tmp_path and return its path."""
    def _write(text: str, name: str = "geometry.obj") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path
    return _write


def obj_lines(text: str) -> list[str]:
    """Split dedented OBJ text into physical lines, as a file iterator would."""
    return textwrap.dedent(text).lstrip("\n").splitlines(keepends=True)


@pytest.fixture
def quarter_circle():
    """Rational quadratic arc: degree 2, three control points, middle weight sqrt(2)/2."""
    return dict(
        degree=2,
        knots=np.array([0.0, 0.0, 0.0, 1.0, 1.0, 1.0]),
        control_points=np.array([[1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.0]]),
        weights=np.array([1.0, np.sqrt(2.0) / 2.0, 1.0]),
    )


@pytest.fixture
def bilinear_patch():
    """3x2 control point grid with degree (2, 1)."""
    n_u, n_v = 3, 2
    control_points = np.zeros((n_u, n_v, 3))
    for i in range(n_u):
        for j in range(n_v):
            control_points[i, j] = [i * 0.5, j * 1.25, (i + 1) * (j + 2) / 3.0]
    return dict(
        degree_u=2,
        degree_v=1,
        knots_u=np.array([0.0, 0.0, 0.0, 1.0, 1.0, 1.0]),
        knots_v=np.array([0.0, 0.0, 2.0, 2.0]),
        control_points=control_points,
        weights=np.array([[1.0, 0.5], [2.0, 0.75], [1.0, 1.5]]),
    )
