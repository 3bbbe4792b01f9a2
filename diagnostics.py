"""
Diagnostics and errors for star-net folding.

Geometric inconsistencies are collected as non-fatal diagnostics:
- Open or clockwise net boundary
- Edge count not matching the triangulated polyhedron
- Edges that do not cross or reach a stated wedge
- Measured bend angles disagreeing along one edge
- Relaxation not converging

Structural failures (faces that do not close, run-away traversals) raise
TopologyError instead.
"""

from dataclasses import dataclass, field


class NetSpecError(ValueError):
    """Malformed net notation (unknown direction, angle unit, wedge name...)."""


class TopologyError(RuntimeError):
    """The half-segment graph is malformed; the mesh cannot be folded."""


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    category: str  # "boundary", "edge_count", "edge_route", "bend_agreement", "convergence", "constraints"
    severity: str  # "error", "warning", "info"
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.severity}] {self.category}: {self.message}"


@dataclass
class Diagnostics:
    """Collected diagnostics of one net."""
    items: list[Diagnostic] = field(default_factory=list)

    def add(self, category: str, severity: str, message: str, **details) -> Diagnostic:
        """Record a diagnostic and return it."""
        diagnostic = Diagnostic(category, severity, message, details)
        self.items.append(diagnostic)
        return diagnostic

    def warn(self, category: str, message: str, **details) -> Diagnostic:
        return self.add(category, "warning", message, **details)

    def info(self, category: str, message: str, **details) -> Diagnostic:
        return self.add(category, "info", message, **details)

    def error(self, category: str, message: str, **details) -> Diagnostic:
        return self.add(category, "error", message, **details)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.severity == "warning" for d in self.items)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.items if d.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.items if d.severity == "warning")

    def get_by_category(self, category: str) -> list[Diagnostic]:
        return [d for d in self.items if d.category == category]

    def messages(self) -> list[str]:
        return [d.message for d in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
