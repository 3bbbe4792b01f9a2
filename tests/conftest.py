"""Pytest fixtures for starfold tests."""

import math
import pytest
import sys
from pathlib import Path

# Modules live at the repository root
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))


# Bend of a regular tetrahedron edge: pi - arccos(1/3)
TETRAHEDRON_BEND = math.degrees(math.pi - math.acos(1 / 3))


def tetrahedron_net() -> tuple[dict, list]:
    """
    Regular tetrahedron with unit edges, cut center at the midpoint of edge a-c.

    The star is a 1 x sqrt(3) rectangle; all four wedges have 180 degrees.
    """
    wedges = {
        "a": "e 180",
        "b": {"angle_deficit": 180, "steps": ["1h", "11h"]},
        "c": "w 180",
        "d": {"angle_deficit": "180deg", "steps": ["7h", "5h"]},
    }
    edges = [
        "a", "b", "c", "d",
        f"a b {TETRAHEDRON_BEND}",
        f"a d {TETRAHEDRON_BEND}",
        f"c b {TETRAHEDRON_BEND}",
        f"c d {TETRAHEDRON_BEND}",
        {"from": "b", "to": "d", "bend": TETRAHEDRON_BEND},
    ]
    return wedges, edges


def cube_net() -> tuple[dict, list]:
    """
    Unit cube, cut from corner O along its three edges O-X, O-Y, O-Z.

    Wedges are the other seven corners: a = XYZ, b = X, c = XY, d = Y,
    e = YZ, f = Z, g = XZ. Edge g-b crosses wedge a.
    """
    wedges = {
        "a": "e e e s 90",
        "b": "e n 90",
        "c": "n n 90",
        "d": "w n 90",
        "e": "w w 90",
        "f": "w s 90",
        "g": "s s 90",
    }
    edges = [
        "b", "d", "f",
        "b c 90", "c d 90", "d e 90", "e f 90", "f g 90",
        "a c 90", "a e 90", "a g 90",
        {"from": "g", "through": ["a"], "to": "b", "bend": 90},
    ]
    return wedges, edges


@pytest.fixture
def tetrahedron() -> tuple[dict, list]:
    return tetrahedron_net()


@pytest.fixture
def cube() -> tuple[dict, list]:
    return cube_net()


@pytest.fixture
def empty_net() -> tuple[dict, list]:
    """A single 360 degree wedge without steps: nothing to fold."""
    return {"a": "360"}, []


@pytest.fixture
def open_net() -> tuple[dict, list]:
    """Boundary walk that does not return to the origin."""
    return {"a": "e 180", "b": "n 180"}, []
