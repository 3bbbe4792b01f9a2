"""
Mesh Builder

Turns a parsed net into the half-segment arenas of a StarMesh:
  - one detached segment pair for every contracted edge
  - one or more segment pairs for every structured edge, split where the
    edge crosses a wedge
  - the cut boundary, joining all vertices in pos_1d order

Faces are not created here; see face_tracer.trace_faces.
"""

from dataclasses import replace
from typing import Optional

from diagnostics import Diagnostics
from net_parser import EdgeRoute, ParsedNet
from star_geometry import interpolate2
from star_mesh import Edge, EdgeBreak, StarMesh


def expected_edge_count(wedge_count: int) -> int:
    """
    Number of edges of the triangulated polyhedron.

    The polyhedron has one vertex per wedge plus the cut center; a
    triangulated closed surface with V vertices has 3 (V - 2) edges.
    """
    return 3 * (wedge_count - 1)


def add_contracted_edge(mesh: StarMesh, route: EdgeRoute) -> Edge:
    """Edge along the cut of one wedge; kept out of the face graph."""
    h = mesh.make_segment(route.from_vertex, route.to_vertex, detached=True)
    edge = Edge(
        name=route.name,
        from_vertex=route.from_vertex,
        to_vertex=route.to_vertex,
        along_cut=True,
        length=route.length,
        bend_angle=0.0,
        segments=[h],
    )
    mesh.edges.append(edge)
    return edge


def add_structured_edge(mesh: StarMesh, route: EdgeRoute, wedge_names: list[str]) -> Edge:
    """
    Edge between two apexes, split at every wedge it crosses.

    Per crossing of wedge w two break vertices are added, one on each
    side of the wedge:
        "<from><<to>#<pivot>" at pos_1d 2w - lambda_p (towards the previous tip)
        "<from>><to>#<pivot>" at pos_1d 2w + lambda_p (towards the wedge's tip)
    """
    edge = Edge(
        name=route.name,
        from_vertex=route.from_vertex,
        to_vertex=route.to_vertex,
        along_cut=False,
        length=route.length,
        bend_angle=route.bend,
    )

    from_name = route.spec.from_wedge
    to_name = route.spec.to_wedge
    n = mesh.primary_count
    prev = route.from_vertex

    for crossing in route.crossings:
        w = crossing.wedge
        pivot = mesh.vertices[2 * w]
        incoming = mesh.vertices[(2 * w - 1) % n]
        outgoing = mesh.vertices[(2 * w + 1) % n]
        v0 = mesh.add_vertex(
            f"{from_name}<{to_name}#{wedge_names[w]}",
            2 * w - crossing.lambda_p,
            interpolate2(pivot.pos_2d, incoming.pos_2d, crossing.lambda_p),
        )
        v1 = mesh.add_vertex(
            f"{from_name}>{to_name}#{wedge_names[w]}",
            2 * w + crossing.lambda_p,
            interpolate2(pivot.pos_2d, outgoing.pos_2d, crossing.lambda_p),
        )
        edge.segments.append(mesh.make_segment(prev, v0.index))
        edge.breaks.append(EdgeBreak(v0.index, v1.index, pivot.index, crossing.lambda_q))
        prev = v1.index

    edge.segments.append(mesh.make_segment(prev, route.to_vertex))

    for h in edge.segments:
        mesh.half_segments[h].user_bend = route.bend
        mesh.half_segments[mesh.twin(h)].user_bend = route.bend

    mesh.edges.append(edge)
    return edge


def add_cut_boundary(mesh: StarMesh) -> list[int]:
    """
    Join all vertices along the star boundary.

    Vertices are sorted by pos_1d; cut i runs from vertex i-1 to vertex i,
    so the first cut closes the loop from the last vertex.
    """
    ordered = sorted(mesh.vertices, key=lambda v: v.pos_1d)
    if len(ordered) == 2:
        # Both neighbours of a two-vertex loop are the same segment
        mesh.cuts = [mesh.make_segment(ordered[1].index, ordered[0].index)]
        return mesh.cuts

    mesh.cuts = [
        mesh.make_segment(ordered[i - 1].index, ordered[i].index)
        for i in range(len(ordered))
    ]
    return mesh.cuts


def build_mesh(
    parsed: ParsedNet,
    diagnostics: Optional[Diagnostics] = None,
    debug: bool = False
) -> StarMesh:
    """
    Build vertices and half-segments of a net.

    Args:
        parsed: Output of net_parser.parse_net
        diagnostics: Sink for non-fatal findings
        debug: If True, print a summary

    Returns:
        StarMesh without faces
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    mesh = StarMesh(
        vertices=[replace(v) for v in parsed.primary_vertices],
        primary_count=len(parsed.primary_vertices),
    )
    wedge_names = [w.name for w in parsed.spec.wedges]

    for route in parsed.routes:
        if route.contracted:
            add_contracted_edge(mesh, route)
        else:
            add_structured_edge(mesh, route, wedge_names)

    add_cut_boundary(mesh)

    expected = expected_edge_count(parsed.wedge_count)
    if len(mesh.edges) != expected:
        diagnostics.warn(
            "edge_count",
            f"expected {expected} edges for {parsed.wedge_count} wedges, "
            f"found {len(mesh.edges)}",
            expected=expected, found=len(mesh.edges),
        )

    if debug:
        breaks = sum(len(e.breaks) for e in mesh.edges)
        print(f"  Mesh: {len(mesh.vertices)} vertices, {len(mesh.half_segments)} half-segments")
        print(f"  Edges: {len(mesh.edges)} ({breaks} breaks), cuts: {len(mesh.cuts)}")

    return mesh
