"""
Configuration for star-net folding.

Defines solver limits, numeric tolerances and the default display state
(bend fraction, auto-bend) used when folding a net.
"""

from dataclasses import dataclass
import json
from pathlib import Path


@dataclass
class FoldConfig:
    """
    Configuration for folding a star net into a polyhedron.

    Attributes:
        max_iterations: Iteration cap of the bend solver's relaxation loop
        cost_limit: Relaxation stops once the total squared displacement drops below this
        bend_fraction: Fraction of each bend angle applied when folding (0 = flat, 1 = folded)
        autobend: Fold with solver-measured bend angles instead of authored ones
        closure_tolerance: Max distance between start and end of the boundary walk
        crossing_margin: Edge/wedge crossings must lie in (margin, 1 - margin)
        turn_epsilon: Smallest turn angle accepted by the face tracer
        bend_agreement_tolerance: Max disagreement of measured bends along one edge
    """
    # Bend solver
    max_iterations: int = 1000
    cost_limit: float = 1e-16

    # Folding
    bend_fraction: float = 1.0
    autobend: bool = False

    # Tolerances
    closure_tolerance: float = 1e-8
    crossing_margin: float = 1e-8
    turn_epsilon: float = 1e-8
    bend_agreement_tolerance: float = 1e-8

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if self.max_iterations < 0:
            errors.append(f"max_iterations cannot be negative, got {self.max_iterations}")

        if self.cost_limit <= 0:
            errors.append(f"cost_limit must be positive, got {self.cost_limit}")

        if not 0.0 <= self.bend_fraction <= 1.0:
            errors.append(f"bend_fraction must be within [0, 1], got {self.bend_fraction}")

        if self.closure_tolerance <= 0:
            errors.append(f"closure_tolerance must be positive, got {self.closure_tolerance}")

        if not 0.0 <= self.crossing_margin < 0.5:
            errors.append(f"crossing_margin must be within [0, 0.5), got {self.crossing_margin}")

        if self.turn_epsilon <= 0:
            errors.append(f"turn_epsilon must be positive, got {self.turn_epsilon}")

        if self.bend_agreement_tolerance <= 0:
            errors.append(
                f"bend_agreement_tolerance must be positive, got {self.bend_agreement_tolerance}"
            )

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "max_iterations": self.max_iterations,
            "cost_limit": self.cost_limit,
            "bend_fraction": self.bend_fraction,
            "autobend": self.autobend,
            "closure_tolerance": self.closure_tolerance,
            "crossing_margin": self.crossing_margin,
            "turn_epsilon": self.turn_epsilon,
            "bend_agreement_tolerance": self.bend_agreement_tolerance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FoldConfig":
        """Create from dictionary."""
        # Accept the display settings' names ("bending", camelCase) as well
        bend_fraction = data.get("bend_fraction", data.get("bending", 1.0))
        max_iterations = data.get("max_iterations", data.get("maxIterations", 1000))
        cost_limit = data.get("cost_limit", data.get("costLimit", 1e-16))

        return cls(
            max_iterations=int(max_iterations),
            cost_limit=float(cost_limit),
            bend_fraction=float(bend_fraction),
            autobend=bool(data.get("autobend", False)),
            closure_tolerance=data.get("closure_tolerance", 1e-8),
            crossing_margin=data.get("crossing_margin", 1e-8),
            turn_epsilon=data.get("turn_epsilon", 1e-8),
            bend_agreement_tolerance=data.get("bend_agreement_tolerance", 1e-8),
        )

    def save(self, filepath: Path | str) -> None:
        """Save configuration to JSON file."""
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path | str) -> "FoldConfig":
        """Load configuration from JSON file."""
        filepath = Path(filepath)
        if not filepath.exists():
            return cls()  # Return defaults if file doesn't exist

        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)


# Solver presets: (max_iterations, cost_limit)
SOLVER_PRESETS = {
    "preview": (100, 1e-8),
    "default": (1000, 1e-16),
    "precise": (20000, 1e-24),
}


def config_from_preset(name: str, **overrides) -> FoldConfig:
    """Create a FoldConfig from a named solver preset."""
    if name not in SOLVER_PRESETS:
        raise ValueError(f"Unknown solver preset '{name}', expected one of {sorted(SOLVER_PRESETS)}")
    max_iterations, cost_limit = SOLVER_PRESETS[name]
    return FoldConfig(max_iterations=max_iterations, cost_limit=cost_limit, **overrides)
