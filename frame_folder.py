"""
Frame Folder

Folds a flat star mesh into 3D.

================================================================================
FRAMES
================================================================================

A UVFrame embeds the flat net into 3D:

    P = origin + x * eu + y * ev

Every face is placed through one frame. The center face uses the root
frame (the net centered on the primary vertex centroid, lying in the XY
plane). Crossing a crease rotates the frame around the crease's 3D line by
the crease's bend angle (right-handed around the half-segment direction),
so the neighbouring face comes out folded.

================================================================================
SIGN CONVENTION
================================================================================

Interior faces are traced counter-clockwise, so the neighbour across a
half-segment lies on its right. A positive bend rotates that neighbour
towards -z: a net with positive bends folds into a convex shape whose
outside faces +z at the center face.

================================================================================
TRAVERSAL
================================================================================

Depth first from the center face. For each half-segment h of a face, in
loop order: place h's target; if h's twin lies in the boundary face stop
there, otherwise fold the face behind h (starting at twin.next, ending
before twin) with the rotated frame before continuing with h.next.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from diagnostics import TopologyError
from star_geometry import (
    Vec2, Vec3, add3, apply_rotation, cross3, dot3, normalize3,
    rotation_matrix_around_axis, scale3, sub3,
)
from star_mesh import StarMesh


@dataclass(frozen=True)
class UVFrame:
    """Affine embedding of 2D net coordinates into 3D."""
    origin: Vec3
    eu: Vec3
    ev: Vec3

    def inject_offset(self, v: Vec2) -> Vec3:
        return add3(scale3(self.eu, v[0]), scale3(self.ev, v[1]))

    def inject_point(self, p: Vec2) -> Vec3:
        return add3(self.origin, self.inject_offset(p))

    def project_offset(self, v: Vec3) -> Vec2:
        return (dot3(v, self.eu), dot3(v, self.ev))

    def project_point(self, p: Vec3) -> Vec2:
        return self.project_offset(sub3(p, self.origin))

    @property
    def normal(self) -> Vec3:
        return cross3(self.eu, self.ev)

    def rotate_around_line(self, p: Vec3, q: Vec3, angle: float) -> 'UVFrame':
        """
        Frame rotated by angle around the line through p and q.

        Right-handed around the direction p -> q. The basis vectors are
        re-normalized to keep rounding errors from accumulating over long
        fold chains.
        """
        rot = rotation_matrix_around_axis(sub3(q, p), angle)
        origin = add3(p, apply_rotation(rot, sub3(self.origin, p)))
        eu = normalize3(apply_rotation(rot, self.eu))
        ev = normalize3(apply_rotation(rot, self.ev))
        return UVFrame(origin, eu, ev)


def initial_frame(mesh: StarMesh) -> UVFrame:
    """Root frame: flat net in the XY plane, centered on the primary vertices."""
    primary = mesh.primary_vertices
    cx = sum(v.pos_2d[0] for v in primary) / len(primary)
    cy = sum(v.pos_2d[1] for v in primary) / len(primary)
    return UVFrame(origin=(-cx, -cy, 0.0), eu=(1.0, 0.0, 0.0), ev=(0.0, 1.0, 0.0))


def _loop(mesh: StarMesh, start: int, stop: int) -> Iterator[int]:
    """Half-segments from start following next, up to (not including) stop."""
    h = start
    steps = 0
    while True:
        yield h
        steps += 1
        h = mesh.half_segments[h].next
        if h == stop:
            return
        if h is None or steps > len(mesh.half_segments):
            raise TopologyError(f"face loop from half-segment {start} does not reach {stop}")


def fold_net(
    mesh: StarMesh,
    center: int,
    bends: list[float],
    bend_fraction: float = 1.0,
    frame: Optional[UVFrame] = None
) -> dict[int, Vec3]:
    """
    3D position of every vertex of a traced mesh.

    Args:
        mesh: Traced mesh (not modified)
        center: Face kept in the root frame
        bends: Bend angle per half-segment index (radians)
        bend_fraction: Multiplier for all bends; 0 gives the flat net
        frame: Root frame; defaults to initial_frame(mesh)

    Returns:
        Mapping of vertex index to 3D position

    Raises:
        TopologyError: If a face is reached twice
    """
    if frame is None:
        frame = initial_frame(mesh)

    positions: dict[int, Vec3] = {}
    visited = {center}

    first = mesh.faces[center].first_half_segment
    stack = [(frame, _loop(mesh, first, first))]

    while stack:
        current, loop = stack[-1]
        h = next(loop, None)
        if h is None:
            stack.pop()
            continue

        he = mesh.half_segments[h]
        source = mesh.source(h)
        positions[he.to] = current.inject_point(mesh.vertices[he.to].pos_2d)

        twin = mesh.half_segments[he.twin]
        if twin.face == mesh.boundary:
            continue
        if twin.face in visited:
            raise TopologyError(
                f"face {mesh.faces[twin.face].name!r} reached twice while folding"
            )
        visited.add(twin.face)

        p = current.inject_point(mesh.vertices[source].pos_2d)
        q = current.inject_point(mesh.vertices[he.to].pos_2d)
        child = current.rotate_around_line(p, q, bends[h] * bend_fraction)
        stack.append((child, _loop(mesh, twin.next, he.twin)))

    return positions


def authored_bends(mesh: StarMesh) -> list[float]:
    """Bend per half-segment as given in the net description."""
    return [he.user_bend for he in mesh.half_segments]


def face_normal(mesh: StarMesh, face: int, positions: dict[int, Vec3]) -> Vec3:
    """Unit normal of a folded face (normalized sum of p_i x p_i+1 along its loop)."""
    total = (0.0, 0.0, 0.0)
    for h in mesh.face_half_segments(face):
        total = add3(total, cross3(positions[mesh.source(h)], positions[mesh.half_segments[h].to]))
    return normalize3(total)
