"""
Net Parser

Lays out the primary vertices of a star net and routes its edges.

================================================================================
LAYOUT
================================================================================

The star boundary is walked from the origin. Each wedge contributes the sum
of its steps as the displacement from the previous tip to its own tip. The
wedge's apex sits to the left of that displacement, forming an isosceles
triangle with apex angle equal to the wedge's angle deficit:

    base_angle = (pi - angle_deficit) / 2
    apex = pos + rotate(step_total, base_angle) * 0.5 / cos(base_angle)

Primary vertices are stored as [apex_0, tip_0, apex_1, tip_1, ...] with
pos_1d equal to their list index, so apexes have even and tips odd pos_1d.
The tip of the last wedge is back at the origin for a closed net.

================================================================================
EDGE ROUTING
================================================================================

An edge from apex F to apex T passing through wedges W1..Wk is straight in
the folded surface, but in the flat net each crossed wedge rotates the
continuation by its angle deficit around its apex. Undoing these rotations
(last wedge first, rotating the target and everything recorded so far by
-deficit around the wedge apex) yields a target position T' such that the
segment F -> T' is the unrolled edge. Its length is the edge's length.

Each crossed wedge is entered through its side apex -> previous tip; the
intersection of F -> T' with that (unrolled) side gives:
  - lambda_p: fraction along the wedge side (apex = 0)
  - lambda_q: fraction along the edge (F = 0)
Both must lie strictly inside (0, 1), otherwise the edge does not actually
cross the wedge.
"""

from dataclasses import dataclass, field, replace
from typing import Optional
import math

from diagnostics import Diagnostics
from fold_config import FoldConfig
from net_spec import EdgeSpec, NetSpec
from star_geometry import (
    Vec2, add2, distance2, intersect_lines, length2, rotate2, rotate_around,
    scale2, signed_area, TAU,
)
from star_mesh import Vertex


@dataclass
class Crossing:
    """Where an edge crosses a wedge."""
    wedge: int
    lambda_p: float  # fraction along the wedge side, from the apex
    lambda_q: float  # fraction along the edge, from its source


@dataclass
class EdgeRoute:
    """An edge with resolved endpoints, length and wedge crossings."""
    spec: EdgeSpec
    from_vertex: int
    to_vertex: int
    length: float
    bend: float
    contracted: bool = False
    crossings: list[Crossing] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass
class ParsedNet:
    """Primary vertices and routed edges of a net."""
    spec: NetSpec
    primary_vertices: list[Vertex]
    routes: list[EdgeRoute]
    total_angle_deficit: float
    closing_offset: Vec2

    @property
    def wedge_count(self) -> int:
        return len(self.spec.wedges)

    @property
    def remaining_angle_deficit(self) -> float:
        """Angle deficit left for the cut center (4 pi in total by Gauss-Bonnet)."""
        return 2 * TAU - self.total_angle_deficit

    def apex(self, wedge: int) -> Vertex:
        return self.primary_vertices[2 * wedge]

    def tip(self, wedge: int) -> Vertex:
        """Tip after the wedge; tip(-1) is the last tip (at the origin)."""
        return self.primary_vertices[(2 * wedge + 1) % len(self.primary_vertices)]


def layout_primary_vertices(
    net: NetSpec,
    config: FoldConfig,
    diagnostics: Diagnostics,
    debug: bool = False
) -> tuple[list[Vertex], float, Vec2]:
    """
    Walk the star boundary and place apex and tip of every wedge.

    Returns:
        (primary_vertices, total_angle_deficit, closing_offset)
    """
    vertices: list[Vertex] = []
    pos = (0.0, 0.0)
    total_angle_deficit = 0.0
    n = len(net.wedges)

    for i, wedge in enumerate(net.wedges):
        step_total = wedge.step_total
        total_angle_deficit += wedge.angle_deficit
        base_angle = (math.pi - wedge.angle_deficit) / 2
        inner = add2(pos, scale2(rotate2(step_total, base_angle), 0.5 / math.cos(base_angle)))
        pos = add2(pos, step_total)
        tip_name = f"{wedge.name}^{net.wedges[(i + 1) % n].name}"
        vertices.append(Vertex(len(vertices), wedge.name, len(vertices), inner))
        vertices.append(Vertex(len(vertices), tip_name, len(vertices), pos))

    if length2(pos) > config.closure_tolerance:
        diagnostics.warn(
            "boundary",
            f"The polygon around the star is not closed. Offset: ({pos[0]}, {pos[1]})",
            offset=pos,
        )

    area = signed_area([v.pos_2d for v in vertices])
    if area < -config.closure_tolerance:
        diagnostics.warn(
            "boundary",
            f"The star boundary is walked clockwise (area {area:.6g}); "
            f"wedges must be listed counter-clockwise",
            area=area,
        )

    if debug:
        remaining = 2 * TAU - total_angle_deficit
        print(f"  Total angle deficit: {total_angle_deficit} = {math.degrees(total_angle_deficit):.5f}°")
        print(f"  Remaining:           {remaining} = {math.degrees(remaining):.5f}°")

    return vertices, total_angle_deficit, pos


def route_edge(
    edge: EdgeSpec,
    net: NetSpec,
    primary_vertices: list[Vertex],
    config: FoldConfig,
    diagnostics: Diagnostics
) -> Optional[EdgeRoute]:
    """
    Resolve endpoints, length and crossings of one edge.

    Returns:
        The route, or None if the edge does not cross a stated wedge
        (reported as a diagnostic).
    """
    index = net.wedge_index()

    if edge.contracted:
        w = index[edge.from_wedge]
        inner = primary_vertices[2 * w]
        outer = primary_vertices[2 * w + 1]
        return EdgeRoute(
            spec=edge,
            from_vertex=inner.index,
            to_vertex=outer.index,
            length=distance2(inner.pos_2d, outer.pos_2d),
            bend=0.0,  # edges along a cut are never bent explicitly
            contracted=True,
        )

    from_vertex = primary_vertices[2 * index[edge.from_wedge]]
    to_vertex = primary_vertices[2 * index[edge.to_wedge]]
    from_pos = from_vertex.pos_2d

    to_rotated = to_vertex.pos_2d
    rotations: list[tuple[int, Vec2, Vec2]] = []  # (wedge, inner, outer)
    for name in reversed(edge.through):
        w = index[name]
        pivot = primary_vertices[2 * w].pos_2d
        angle = -net.wedges[w].angle_deficit
        to_rotated = rotate_around(to_rotated, pivot, angle)
        rotations = [
            (r_w, rotate_around(inner, pivot, angle), rotate_around(outer, pivot, angle))
            for r_w, inner, outer in rotations
        ]
        # Side towards the previous tip; wraps to the last tip for the first wedge
        rotations.insert(0, (w, pivot, primary_vertices[2 * w - 1].pos_2d))

    length = distance2(from_pos, to_rotated)
    margin = config.crossing_margin

    crossings = []
    for (w, inner, outer), name in zip(rotations, edge.through):
        np_, nq, d = intersect_lines(inner, outer, from_pos, to_rotated)
        if d == 0:
            diagnostics.warn(
                "edge_route",
                f"edge {edge.name} runs parallel to the side of wedge {name}",
                edge=edge.name, wedge=name,
            )
            return None
        lambda_p = np_ / d
        lambda_q = nq / d
        if not margin < lambda_p < 1 - margin:
            diagnostics.warn(
                "edge_route",
                f"edge {edge.name} does not pass through wedge {name} "
                f"(crossing at {lambda_p:.6g} along the wedge side)",
                edge=edge.name, wedge=name, lambda_p=lambda_p,
            )
            return None
        if not margin < lambda_q < 1 - margin:
            diagnostics.warn(
                "edge_route",
                f"edge {edge.name} does not reach wedge {name} "
                f"(crossing at {lambda_q:.6g} along the edge)",
                edge=edge.name, wedge=name, lambda_q=lambda_q,
            )
            return None
        crossings.append(Crossing(w, lambda_p, lambda_q))

    return EdgeRoute(
        spec=edge,
        from_vertex=from_vertex.index,
        to_vertex=to_vertex.index,
        length=length,
        bend=edge.bend,
        crossings=crossings,
    )


def parse_net(
    net: NetSpec,
    config: Optional[FoldConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
    debug: bool = False
) -> ParsedNet:
    """
    Lay out a net and route its edges.

    Args:
        net: Resolved net description (see net_spec.parse_net_spec)
        config: Tolerances; defaults to FoldConfig()
        diagnostics: Sink for non-fatal findings
        debug: If True, print layout information.

    Returns:
        ParsedNet; edges that fail to cross a stated wedge are left out.
    """
    if config is None:
        config = FoldConfig()
    if diagnostics is None:
        diagnostics = Diagnostics()

    vertices, total_angle_deficit, offset = layout_primary_vertices(
        net, config, diagnostics, debug=debug
    )

    routes = []
    for edge in net.edges:
        route = route_edge(edge, net, vertices, config, diagnostics)
        if route is not None:
            routes.append(route)

    if debug:
        for v in vertices:
            print(f"  {v.name:<8} @ {v.pos_1d} / ({v.pos_2d[0]:.2f}, {v.pos_2d[1]:.2f})")
        print(f"  Routed edges: {len(routes)} of {len(net.edges)}")

    return ParsedNet(
        spec=net,
        primary_vertices=[replace(v) for v in vertices],
        routes=routes,
        total_angle_deficit=total_angle_deficit,
        closing_offset=offset,
    )
