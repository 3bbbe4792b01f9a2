"""
Bend Solver

Finds the bend angles that actually close a net into a polyhedron.

Authored bend angles are rarely exact. Starting from the net folded with
the authored angles, the solver moves the primary vertices until

  - adjacent tips coincide (the two sides of each wedge are glued), and
  - the ends of every edge are at the edge's length,

and then measures the dihedral angle at every crease of the relaxed layout.

================================================================================
RELAXATION
================================================================================

Every constraint (from, to, distance) pulls vertex `to`:

    distance == 0:  target offset = pos(from) - pos(to)
    otherwise:      target offset = (distance - |to - from|) * unit(to - from)

Per iteration all offsets are computed from the same iterate (Jacobi
style); each vertex then moves by the average of its offsets. The cost is
the sum of the squared offsets; iteration stops once it drops below
cost_limit.

================================================================================
MEASURED BENDS
================================================================================

Face normals are the normalized sums of p_i x p_i+1 along the face loop.
From the center face outwards, the bend of a crease with unit direction a
between faces with normals n1 (near side) and n2 (far side) is

    atan2(n1 . (n2 x a), n1 . n2)

which is the angle the frame folder must rotate by to reproduce the layout.
"""

from dataclasses import dataclass, field
from typing import Optional

from diagnostics import Diagnostics
from fold_config import FoldConfig
from frame_folder import face_normal
from star_geometry import (
    Vec3, add3, directed_angle, dot3, interpolate3, length3, normalize3, scale3, sub3,
)
from star_mesh import StarMesh


@dataclass
class BendSolution:
    """Relaxed positions and measured bends; the input layout is left untouched."""
    positions: dict[int, Vec3]
    computed_bends: list[float]  # per half-segment index
    cost: float
    iterations: int
    converged: bool
    constraint_count: int = 0
    unconstrained: list[int] = field(default_factory=list)


def collect_constraints(mesh: StarMesh) -> dict[int, list[tuple[int, float]]]:
    """
    Constraints acting on each primary vertex.

    Returns:
        Mapping of vertex index to a list of (source vertex, distance)
    """
    primary = mesh.primary_vertices
    sources: dict[int, list[tuple[int, float]]] = {v.index: [] for v in primary}

    # Adjacent tips coincide
    for i in range(1, len(primary), 2):
        v0 = primary[i - 2].index
        v1 = primary[i].index
        sources[v1].append((v0, 0.0))
        sources[v0].append((v1, 0.0))

    for edge in mesh.edges:
        sources[edge.to_vertex].append((edge.from_vertex, edge.length))
        sources[edge.from_vertex].append((edge.to_vertex, edge.length))

    return sources


def relax(
    positions: dict[int, Vec3],
    sources: dict[int, list[tuple[int, float]]],
    max_iterations: int,
    cost_limit: float
) -> tuple[float, int]:
    """
    Move constrained vertices in place until the cost drops below cost_limit.

    Returns:
        (final cost, iterations done)
    """
    cost = 0.0
    iteration = 0
    for iteration in range(max_iterations + 1):
        cost = 0.0
        forces: dict[int, Vec3] = {}
        for to, constraints in sources.items():
            to_pos = positions[to]
            total = (0.0, 0.0, 0.0)
            for source, distance in constraints:
                from_pos = positions[source]
                if distance == 0:
                    offset = sub3(from_pos, to_pos)
                else:
                    delta = sub3(to_pos, from_pos)
                    current = length3(delta)
                    if current == 0:
                        continue
                    offset = scale3(normalize3(delta), distance - current)
                cost += dot3(offset, offset)
                total = add3(total, offset)
            forces[to] = total

        if cost < cost_limit or iteration == max_iterations:
            break

        for to, total in forces.items():
            if sources[to]:
                positions[to] = add3(positions[to], scale3(total, 1 / len(sources[to])))

    return cost, iteration


def measure_bends(
    mesh: StarMesh,
    center: int,
    positions: dict[int, Vec3]
) -> list[float]:
    """Dihedral bend of every crease, measured outwards from the center face."""
    bends = [0.0] * len(mesh.half_segments)

    def crease_direction(h: int) -> Vec3:
        return normalize3(sub3(positions[mesh.half_segments[h].to], positions[mesh.source(h)]))

    center_normal = face_normal(mesh, center, positions)
    stack = [(h, center_normal) for h in reversed(list(mesh.face_half_segments(center)))]

    while stack:
        h, normal = stack.pop()
        twin = mesh.half_segments[mesh.twin(h)]
        if twin.face == mesh.boundary:
            continue
        twin_normal = face_normal(mesh, twin.face, positions)
        bend = directed_angle(normal, twin_normal, crease_direction(h))
        bends[h] = bend
        bends[twin.index] = bend

        children = []
        g = twin.next
        while g != twin.index:
            children.append(g)
            g = mesh.half_segments[g].next
        stack.extend((g, twin_normal) for g in reversed(children))

    return bends


def check_bend_agreement(
    mesh: StarMesh,
    bends: list[float],
    tolerance: float,
    diagnostics: Diagnostics
) -> int:
    """
    Report edges whose segments got different measured bends.

    Returns:
        Number of disagreeing segment pairs
    """
    count = 0
    for edge in mesh.edges:
        segments = edge.segments
        for i in range(len(segments)):
            for j in range(i + 1, len(segments)):
                diff = abs(bends[segments[i]] - bends[segments[j]])
                if diff > tolerance:
                    count += 1
                    diagnostics.warn(
                        "bend_agreement",
                        f"computed bend angles for segments of edge {edge.name} "
                        f"differ by {diff:.3e}",
                        edge=edge.name,
                        bends=(bends[segments[i]], bends[segments[j]]),
                    )
    return count


def solve_bends(
    mesh: StarMesh,
    center: int,
    initial_positions: dict[int, Vec3],
    config: Optional[FoldConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
    debug: bool = False
) -> BendSolution:
    """
    Relax a folded layout and measure the resulting bends.

    Args:
        mesh: Traced mesh
        center: Center face index
        initial_positions: Layout to start from, typically fold_net with
            the authored bends (not modified)
        config: Iteration cap, cost limit and bend agreement tolerance
        diagnostics: Sink for non-fatal findings
        debug: If True, print the solver summary

    Returns:
        BendSolution
    """
    if config is None:
        config = FoldConfig()
    if diagnostics is None:
        diagnostics = Diagnostics()

    positions = dict(initial_positions)
    sources = collect_constraints(mesh)

    unconstrained = [v for v, constraints in sources.items() if not constraints]
    for v in unconstrained:
        diagnostics.warn(
            "constraints",
            f'no forces exerted on vertex "{mesh.vertices[v].name}"',
            vertex=mesh.vertices[v].name,
        )

    cost, iterations = relax(positions, sources, config.max_iterations, config.cost_limit)
    converged = cost < config.cost_limit
    if not converged:
        diagnostics.warn(
            "convergence",
            f"relaxation did not converge after {iterations} steps: cost = {cost:.6g}",
            cost=cost, iterations=iterations,
        )

    if debug:
        print(f"  Relaxation: {iterations} steps, cost = {cost}")

    # Break vertices sit on the straight edge between its relaxed ends
    for edge in mesh.edges:
        for b in edge.breaks:
            cut_pos = interpolate3(positions[edge.from_vertex], positions[edge.to_vertex], b.t)
            positions[b.from_vertex] = cut_pos
            positions[b.to_vertex] = cut_pos

    computed_bends = measure_bends(mesh, center, positions)
    check_bend_agreement(mesh, computed_bends, config.bend_agreement_tolerance, diagnostics)

    return BendSolution(
        positions=positions,
        computed_bends=computed_bends,
        cost=cost,
        iterations=iterations,
        converged=converged,
        constraint_count=sum(len(c) for c in sources.values()),
        unconstrained=unconstrained,
    )
