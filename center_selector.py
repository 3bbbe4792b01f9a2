"""
Center Selector

Picks the face that stays fixed while the net is folded: the face farthest
from the star boundary, measured by walking across segments (step length
= 2D length of the crossed segment).
"""

from collections import deque
from dataclasses import dataclass, field

from star_mesh import StarMesh


@dataclass
class CenterSelection:
    """The chosen center face and the distance of every reached face."""
    center: int
    distances: dict[int, float] = field(default_factory=dict)


def face_distances(mesh: StarMesh) -> dict[int, float]:
    """
    Shortest crossing distance from the boundary face to every face.

    Worklist relaxation: a face is re-queued only when its distance
    strictly decreases.
    """
    distances = {mesh.boundary: 0.0}
    worklist = deque([mesh.boundary])

    while worklist:
        face = worklist.popleft()
        for h in mesh.face_half_segments(face):
            neighbour = mesh.half_segments[mesh.twin(h)].face
            distance = distances[face] + mesh.segment_length(h)
            if neighbour not in distances or distance < distances[neighbour]:
                distances[neighbour] = distance
                worklist.append(neighbour)

    return distances


def select_center_face(mesh: StarMesh, debug: bool = False) -> CenterSelection:
    """
    Choose the center face.

    The non-boundary face with the largest distance wins; on ties the
    first face in face order. A mesh without interior faces returns the
    boundary face itself.
    """
    distances = face_distances(mesh)

    center = mesh.boundary
    best = -1.0
    for face in mesh.interior_faces():
        if face in distances and distances[face] > best:
            best = distances[face]
            center = face

    if debug:
        print(f"  Center face: {mesh.faces[center].name} (distance {distances[center]:.4f})")

    return CenterSelection(center=center, distances=distances)
