"""
Star net pipeline.

Runs notation -> parser -> mesh builder -> face tracer -> center selector
-> fold with authored bends -> bend solver once per net, then serves 3D
positions and render geometry for any bend fraction.

Usage:
    net = StarNet.from_spec(
        {"a": "e 180", "b": {"angle_deficit": 180, "steps": ["1h", "11h"]}, ...},
        ["a", "b", "a b 109.47", ...],
    )
    positions = net.positions(bend_fraction=0.5, autobend=True)
"""

from typing import Optional

from center_selector import CenterSelection, select_center_face
from bend_solver import BendSolution, solve_bends
from diagnostics import Diagnostics
from face_tracer import trace_faces
from fold_config import FoldConfig
from frame_folder import authored_bends, fold_net
from mesh_builder import build_mesh
from net_parser import ParsedNet, parse_net
from net_spec import NetSpec, parse_net_spec
from render_mesh import (
    Mesh, build_face_mesh, break_arcs, crease_polylines, cut_polylines, flower_arcs,
)
from star_geometry import Vec3
from star_mesh import Edge, StarMesh, Vertex


class StarNet:
    """A traced and solved star net."""

    def __init__(
        self,
        parsed: ParsedNet,
        mesh: StarMesh,
        selection: CenterSelection,
        solution: BendSolution,
        config: FoldConfig,
        diagnostics: Diagnostics
    ):
        self.parsed = parsed
        self.mesh = mesh
        self.selection = selection
        self.solution = solution
        self.config = config
        self.diagnostics = diagnostics

    @classmethod
    def from_spec(
        cls,
        wedges,
        edges,
        config: Optional[FoldConfig] = None,
        debug: bool = False
    ) -> 'StarNet':
        """
        Build a net from its notation (see net_spec).

        Raises:
            NetSpecError: If the notation is malformed
            TopologyError: If the faces cannot be traced or folded
            ValueError: If the configuration is invalid
        """
        return cls.from_net_spec(parse_net_spec(wedges, edges), config=config, debug=debug)

    @classmethod
    def from_net_spec(
        cls,
        spec: NetSpec,
        config: Optional[FoldConfig] = None,
        debug: bool = False
    ) -> 'StarNet':
        """Build a net from an already resolved NetSpec."""
        if config is None:
            config = FoldConfig()
        errors = config.validate()
        if errors:
            raise ValueError("Invalid fold configuration: " + "; ".join(errors))

        diagnostics = Diagnostics()

        if debug:
            print(f"Star net: {len(spec.wedges)} wedges, {len(spec.edges)} edges")

        parsed = parse_net(spec, config, diagnostics, debug=debug)
        mesh = build_mesh(parsed, diagnostics, debug=debug)
        trace_faces(mesh, config, debug=debug)
        selection = select_center_face(mesh, debug=debug)

        initial = fold_net(mesh, selection.center, authored_bends(mesh), 1.0)
        solution = solve_bends(
            mesh, selection.center, initial, config, diagnostics, debug=debug
        )

        if debug:
            for d in diagnostics:
                print(f"  {d}")

        return cls(parsed, mesh, selection, solution, config, diagnostics)

    @property
    def boundary(self) -> int:
        return self.mesh.boundary

    @property
    def center(self) -> int:
        return self.selection.center

    @property
    def edges(self) -> list[Edge]:
        return self.mesh.edges

    @property
    def primary_vertices(self) -> list[Vertex]:
        return self.mesh.primary_vertices

    def bends(self, autobend: Optional[bool] = None) -> list[float]:
        """Bend per half-segment: measured if autobend, otherwise authored."""
        if autobend is None:
            autobend = self.config.autobend
        if autobend:
            return self.solution.computed_bends
        return authored_bends(self.mesh)

    def positions(
        self,
        bend_fraction: Optional[float] = None,
        autobend: Optional[bool] = None
    ) -> dict[int, Vec3]:
        """
        3D position of every vertex.

        Args:
            bend_fraction: 0 = flat net, 1 = fully folded (default from config)
            autobend: Use the solver's measured bends (default from config)
        """
        if bend_fraction is None:
            bend_fraction = self.config.bend_fraction
        return fold_net(self.mesh, self.center, self.bends(autobend), bend_fraction)

    def face_loops(self) -> list[list[int]]:
        """Vertex indices of every non-boundary face, in loop order."""
        return [self.mesh.face_vertices(f) for f in self.mesh.interior_faces()]

    def render_mesh(
        self,
        bend_fraction: Optional[float] = None,
        autobend: Optional[bool] = None,
        colored: bool = False
    ) -> Mesh:
        """Triangle mesh of the folded net."""
        return build_face_mesh(self.mesh, self.positions(bend_fraction, autobend), colored)

    def render_lines(
        self,
        bend_fraction: Optional[float] = None,
        autobend: Optional[bool] = None,
        arc_steps: int = 8,
        flower_steps: int = 20
    ) -> dict:
        """Creases, cuts, break arcs and apex flower arcs of the folded net."""
        positions = self.positions(bend_fraction, autobend)
        return {
            "creases": crease_polylines(self.mesh, positions),
            "cuts": cut_polylines(self.mesh, positions),
            "arcs": break_arcs(self.mesh, positions, arc_steps),
            "flowers": flower_arcs(self.mesh, positions, flower_steps),
        }
