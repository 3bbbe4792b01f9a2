"""
Half-segment mesh of a star net.

Vertices, half-segments and faces live in three lists owned by StarMesh;
all cross references are indices into these lists, so the twin/next/face
links never form object reference cycles.

A "half-segment" is one direction of a straight piece of the net: either a
piece of the cut boundary or a piece of an edge (edges crossing wedges are
split into several segments).
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from diagnostics import TopologyError
from star_geometry import TAU, Vec2, direction2, distance2, signed_area


@dataclass
class Vertex:
    """
    A vertex of the flat net.

    pos_1d is the position along the star boundary walk:
    even integer = wedge apex, odd integer = wedge tip,
    non-integer = intersection of an edge with a wedge side.
    """
    index: int
    name: str
    pos_1d: float
    pos_2d: Vec2
    first_half_segment_out: Optional[int] = None

    @property
    def kind(self) -> str:
        """Vertex kind: "apex", "tip" or "break"."""
        if not float(self.pos_1d).is_integer():
            return "break"
        return "apex" if int(self.pos_1d) % 2 == 0 else "tip"

    def __repr__(self):
        return (
            f"Vertex({self.name!r}, pos_1d={self.pos_1d:.3f}, "
            f"pos_2d=({self.pos_2d[0]:.3f}, {self.pos_2d[1]:.3f}))"
        )


@dataclass
class HalfSegment:
    """One direction of a segment; created in twin pairs by StarMesh.make_segment."""
    index: int
    to: int  # target vertex
    direction: float  # radians from the positive x axis
    twin: int
    next: Optional[int] = None  # set by the face tracer
    face: Optional[int] = None  # set by the face tracer
    user_bend: float = 0.0  # authored bend angle in radians
    detached: bool = False  # not part of the face graph (contracted edges)


@dataclass
class Face:
    """A loop of half-segments, defined by following next from first_half_segment."""
    index: int
    name: str
    first_half_segment: int


@dataclass
class EdgeBreak:
    """Where an edge crosses a wedge: the intersection vertices on both wedge sides."""
    from_vertex: int
    to_vertex: int
    pivot: int  # apex of the crossed wedge
    t: float  # parameter along the logical edge


@dataclass
class Edge:
    """
    An edge where the polyhedron is bent.

    It may be subdivided into several segments in the star, one more
    segment than breaks. The bend angle is pi minus the dihedral angle, so 0
    means no bend; negative values bend to the other side.
    """
    name: str
    from_vertex: int
    to_vertex: int
    along_cut: bool
    length: float
    bend_angle: float
    segments: list[int] = field(default_factory=list)
    breaks: list[EdgeBreak] = field(default_factory=list)


@dataclass
class StarMesh:
    """The vertex, half-segment and face arenas of one net."""
    vertices: list[Vertex] = field(default_factory=list)
    half_segments: list[HalfSegment] = field(default_factory=list)
    faces: list[Face] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    # Forward half-segments of the cut boundary, in pos_1d order
    cuts: list[int] = field(default_factory=list)

    # Number of primary vertices (apex, tip per wedge) at the start of vertices
    primary_count: int = 0

    boundary: Optional[int] = None  # set by the face tracer

    def add_vertex(self, name: str, pos_1d: float, pos_2d: Vec2) -> Vertex:
        """Add a vertex and return it."""
        vertex = Vertex(len(self.vertices), name, pos_1d, pos_2d)
        self.vertices.append(vertex)
        return vertex

    def make_segment(self, v0: int, v1: int, detached: bool = False) -> int:
        """
        Create the twin pair v0 -> v1 / v1 -> v0.

        Returns:
            Index of the half-segment pointing at v1.
        """
        direction = direction2(self.vertices[v0].pos_2d, self.vertices[v1].pos_2d)
        i0 = len(self.half_segments)
        he0 = HalfSegment(i0, to=v1, direction=direction, twin=i0 + 1, detached=detached)
        he1 = HalfSegment(
            i0 + 1, to=v0, direction=(direction + TAU / 2) % TAU, twin=i0, detached=detached
        )
        self.half_segments.extend([he0, he1])
        return i0

    @property
    def primary_vertices(self) -> list[Vertex]:
        return self.vertices[:self.primary_count]

    def source(self, h: int) -> int:
        """Vertex a half-segment starts at."""
        return self.half_segments[self.half_segments[h].twin].to

    def twin(self, h: int) -> int:
        return self.half_segments[h].twin

    def segment_length(self, h: int) -> float:
        """2D length of a half-segment."""
        he = self.half_segments[h]
        return distance2(self.vertices[self.source(h)].pos_2d, self.vertices[he.to].pos_2d)

    def face_half_segments(self, face: int) -> Iterator[int]:
        """
        Iterate the half-segments of a face in loop order.

        Raises:
            TopologyError: If the loop does not close
        """
        first = self.faces[face].first_half_segment
        h = first
        count = 0
        while True:
            yield h
            count += 1
            if count > len(self.half_segments):
                raise TopologyError(
                    f"run-away iteration around face {self.faces[face].name!r}"
                )
            h = self.half_segments[h].next
            if h is None:
                raise TopologyError(
                    f"face {self.faces[face].name!r} is not closed (missing next link)"
                )
            if h == first:
                return

    def face_vertices(self, face: int) -> list[int]:
        """Vertices of a face in loop order (targets of its half-segments)."""
        return [self.half_segments[h].to for h in self.face_half_segments(face)]

    def face_area(self, face: int) -> float:
        """Signed 2D area of a face (positive for counter-clockwise loops)."""
        return signed_area([self.vertices[v].pos_2d for v in self.face_vertices(face)])

    def graph_half_segments(self) -> list[int]:
        """Half-segments that take part in the face graph."""
        return [he.index for he in self.half_segments if not he.detached]

    def interior_faces(self) -> list[int]:
        """All faces except the unbounded boundary face."""
        return [f.index for f in self.faces if f.index != self.boundary]

    def vertex_by_name(self, name: str) -> Vertex:
        for vertex in self.vertices:
            if vertex.name == name:
                return vertex
        raise KeyError(name)

    def edge_by_name(self, name: str) -> Edge:
        for edge in self.edges:
            if edge.name == name:
                return edge
        raise KeyError(name)

    def is_crease(self, h: int) -> bool:
        """True if h separates two non-boundary faces."""
        he = self.half_segments[h]
        if he.detached or he.face is None:
            return False
        twin = self.half_segments[he.twin]
        return he.face != self.boundary and twin.face != self.boundary

