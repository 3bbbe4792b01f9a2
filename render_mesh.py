"""
Render-ready geometry of a folded net.

Turns a vertex position map into:
  - a triangle mesh of the non-boundary faces (fan triangulation)
  - crease polylines per logical edge
  - cut polylines
  - arcs around the pivot of every edge break
  - "flower" arcs around every apex, from the previous tip to its own tip
"""

from dataclasses import dataclass, field
from typing import Optional

from star_geometry import Vec3, arc_path, cross3, length3, normalize3, sub3
from star_mesh import StarMesh


# Face palette (RGB 0-255), picked by face index
FACE_COLORS = [
    (230, 97, 1),
    (253, 184, 99),
    (178, 171, 210),
    (94, 60, 153),
    (27, 158, 119),
    (217, 95, 2),
    (117, 112, 179),
    (231, 41, 138),
    (102, 166, 30),
    (230, 171, 2),
]


@dataclass
class Mesh:
    """
    Triangles of a folded net.

    source_faces[i] is the star face triangle i was cut from (-1 if none);
    colors is either empty or holds one color per triangle.
    """
    vertices: list[Vec3] = field(default_factory=list)
    faces: list[list[int]] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)
    source_faces: list[int] = field(default_factory=list)
    colors: list[tuple[int, int, int]] = field(default_factory=list)

    def add_vertex(self, v: Vec3) -> int:
        self.vertices.append(v)
        return len(self.vertices) - 1

    def add_triangle(
        self,
        v0: int,
        v1: int,
        v2: int,
        source_face: int = -1,
        color: Optional[tuple[int, int, int]] = None
    ):
        self.faces.append([v0, v1, v2])
        self.source_faces.append(source_face)
        if color:
            self.colors.append(color)

    def compute_normals(self):
        """Unit normal per triangle; collapsed triangles get +z."""
        self.normals = []
        for i0, i1, i2 in self.faces:
            p0 = self.vertices[i0]
            n = cross3(sub3(self.vertices[i1], p0), sub3(self.vertices[i2], p0))
            if length3(n) > 1e-10:
                self.normals.append(normalize3(n))
            else:
                self.normals.append((0, 0, 1))

    def to_obj(self, filename: str):
        """Write a Wavefront OBJ file, one group per star face."""
        with open(filename, 'w') as f:
            f.write("# starfold folded net\n")
            f.write(f"# {len(self.vertices)} vertices, {len(self.faces)} triangles\n")
            for x, y, z in self.vertices:
                f.write(f"v {x:.6f} {y:.6f} {z:.6f}\n")

            group = None
            for face, source in zip(self.faces, self.source_faces):
                if source != group:
                    group = source
                    f.write(f"g face_{source}\n")
                # OBJ indices start at 1
                f.write("f " + " ".join(str(i + 1) for i in face) + "\n")

    def to_stl(self, filename: str):
        """Write an ASCII STL file."""
        if len(self.normals) != len(self.faces):
            self.compute_normals()

        with open(filename, 'w') as f:
            f.write("solid starfold\n")
            for (nx, ny, nz), face in zip(self.normals, self.faces):
                f.write(f"facet normal {nx:.6f} {ny:.6f} {nz:.6f}\n")
                f.write(" outer loop\n")
                for i in face:
                    x, y, z = self.vertices[i]
                    f.write(f"  vertex {x:.6f} {y:.6f} {z:.6f}\n")
                f.write(" endloop\n")
                f.write("endfacet\n")
            f.write("endsolid starfold\n")


def build_face_mesh(
    mesh: StarMesh,
    positions: dict[int, Vec3],
    colored: bool = False
) -> Mesh:
    """
    Triangulate every non-boundary face as a fan.

    The fan is rooted at the target of the face's first half-segment.
    Vertices are shared between faces.
    """
    result = Mesh()
    index_map: dict[int, int] = {}

    def mesh_vertex(v: int) -> int:
        if v not in index_map:
            index_map[v] = result.add_vertex(positions[v])
        return index_map[v]

    for face in mesh.interior_faces():
        loop = [mesh_vertex(v) for v in mesh.face_vertices(face)]
        color = FACE_COLORS[face % len(FACE_COLORS)] if colored else None
        for i in range(1, len(loop) - 1):
            result.add_triangle(loop[0], loop[i], loop[i + 1], source_face=face, color=color)

    result.compute_normals()
    return result


def crease_polylines(
    mesh: StarMesh,
    positions: dict[int, Vec3]
) -> dict[str, list[tuple[Vec3, Vec3]]]:
    """3D segments of every edge that is not along the cut, keyed by edge name."""
    polylines = {}
    for edge in mesh.edges:
        if edge.along_cut:
            continue
        polylines[edge.name] = [
            (positions[mesh.source(h)], positions[mesh.half_segments[h].to])
            for h in edge.segments
        ]
    return polylines


def cut_polylines(
    mesh: StarMesh,
    positions: dict[int, Vec3]
) -> list[tuple[Vec3, Vec3]]:
    """3D segments of the cut boundary, in boundary order."""
    return [
        (positions[mesh.source(h)], positions[mesh.half_segments[h].to])
        for h in mesh.cuts
    ]


def break_arcs(
    mesh: StarMesh,
    positions: dict[int, Vec3],
    steps: int = 8,
    edges: Optional[list[str]] = None
) -> list[list[Vec3]]:
    """
    Arcs around the pivot of every break, from one intersection vertex to the other.

    In the flat net an arc shows which two points of a wedge's sides are
    glued; once folded they meet and the arc collapses.
    """
    arcs = []
    for edge in mesh.edges:
        if edges is not None and edge.name not in edges:
            continue
        for b in edge.breaks:
            arcs.append(arc_path(
                positions[b.pivot],
                positions[b.from_vertex],
                positions[b.to_vertex],
                steps,
            ))
    return arcs


def flower_arcs(
    mesh: StarMesh,
    positions: dict[int, Vec3],
    steps: int = 20
) -> list[list[Vec3]]:
    """
    Arcs around every apex, from the previous tip to the wedge's own tip.

    Flat, each arc spans the wedge's angle deficit; folded, the two tips
    meet and the arc closes up.
    """
    primary = mesh.primary_vertices
    arcs = []
    for i in range(0, len(primary), 2):
        arcs.append(arc_path(
            positions[primary[i].index],
            positions[primary[i - 1].index],
            positions[primary[i + 1].index],
            steps,
        ))
    return arcs
