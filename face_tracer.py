"""
Face Tracer

Finds the faces of a star mesh by walking its half-segments.

Algorithm:
1. Index the half-segments leaving each vertex (edge segments first, then
   the cut boundary, each followed by its twin)
2. From every half-segment not yet in a face, repeatedly take the leaving
   half-segment with the smallest turn

       turn = (current.direction - candidate.direction + 3 pi) mod 2 pi

   i.e. the first half-segment clockwise from the reversed incoming
   direction. Interior faces come out counter-clockwise, the outside of
   the star as one clockwise loop (the boundary face).
3. Link next/face and set each vertex's first outgoing half-segment

A vertex with no usable continuation (only on the degenerate two-vertex
boundary of an empty net) sends the walk back along the twin.
"""

from typing import Optional
import math

from diagnostics import TopologyError
from fold_config import FoldConfig
from star_geometry import TAU
from star_mesh import Face, StarMesh


def index_outgoing(mesh: StarMesh) -> dict[int, list[int]]:
    """Half-segments of the face graph leaving each vertex, in arena order."""
    outgoing: dict[int, list[int]] = {v.index: [] for v in mesh.vertices}
    for h in mesh.graph_half_segments():
        outgoing[mesh.source(h)].append(h)
    return outgoing


def turn_angle(current_direction: float, candidate_direction: float) -> float:
    """Clockwise turn from the reversed current direction to the candidate."""
    return (current_direction - candidate_direction + 3 * TAU / 2) % TAU


def next_half_segment(
    mesh: StarMesh,
    h: int,
    candidates: list[int],
    turn_epsilon: float = 1e-8
) -> int:
    """Continuation of h around its face."""
    direction = mesh.half_segments[h].direction

    best = None
    best_turn = math.inf
    for c in candidates:
        turn = turn_angle(direction, mesh.half_segments[c].direction)
        if turn_epsilon < turn < best_turn:
            best = c
            best_turn = turn

    if best is None:
        # Dead end: go back the way we came
        return mesh.twin(h)
    return best


def trace_faces(
    mesh: StarMesh,
    config: Optional[FoldConfig] = None,
    debug: bool = False
) -> StarMesh:
    """
    Assign next and face to every half-segment of the face graph.

    Args:
        mesh: Mesh from mesh_builder.build_mesh; updated in place
        config: Supplies the turn epsilon
        debug: If True, print the traced faces

    Returns:
        The same mesh, with faces and boundary set

    Raises:
        TopologyError: If a face loop does not close
    """
    if config is None:
        config = FoldConfig()

    outgoing = index_outgoing(mesh)
    max_steps = len(mesh.half_segments)

    for start in mesh.graph_half_segments():
        if mesh.half_segments[start].face is not None:
            continue

        face_index = len(mesh.faces)
        names = []
        h = start
        steps = 0
        while True:
            he = mesh.half_segments[h]
            he.face = face_index
            names.append(mesh.vertices[he.to].name)
            he.next = next_half_segment(mesh, h, outgoing[he.to], config.turn_epsilon)

            steps += 1
            if he.next == start:
                break
            if steps > max_steps:
                raise TopologyError(
                    f"face starting at half-segment {start} did not close "
                    f"within {max_steps} steps"
                )
            if mesh.half_segments[he.next].face is not None:
                raise TopologyError(
                    f"face starting at half-segment {start} runs into "
                    f"half-segment {he.next} of face {mesh.half_segments[he.next].face}"
                )
            h = he.next

        mesh.faces.append(Face(face_index, " ".join(names), start))

    for h in mesh.graph_half_segments():
        he = mesh.half_segments[h]
        target = mesh.vertices[he.to]
        if target.first_half_segment_out is None:
            target.first_half_segment_out = he.twin

    mesh.boundary = mesh.half_segments[mesh.twin(mesh.cuts[0])].face

    if debug:
        print(f"  Faces: {len(mesh.faces)} (boundary: {mesh.faces[mesh.boundary].name})")
        for face in mesh.faces:
            if face.index != mesh.boundary:
                print(f"    {face.index}: {face.name}  area={mesh.face_area(face.index):.4f}")

    return mesh
