"""
Star net notation.

A net is described by a wedge table and an edge list:

    wedges = {
        "a": {"angle_deficit": 90, "steps": ["e", "e", "e", "s"]},
        "b": "e n 90",                # abbreviated: steps..., angle deficit
    }
    edges = [
        "b",                          # contracted edge along the cut of wedge b
        {"from": "g", "through": ["a"], "to": "b", "bend": 90},
        "a c 90",                     # abbreviated: from, through..., to, bend
    ]

Steps:
  - compass letters "e", "n", "w", "s"
  - hex-clock directions "1h" ... "12h" (12h points north, 3h east)
  - {"x": .., "y": ..} vectors or (x, y) pairs
  - {"amount": .., "direction": <short direction or angle>}

Angles are numbers (degrees) or strings with an optional unit: "90",
"90deg", "90°", "1.5708rad"; {"num": .., "unit": "deg" | "rad"} works too.
"""

from dataclasses import dataclass, field
import math
import re

from diagnostics import NetSpecError


R3_HALF = math.sqrt(3) / 2

DIRECTIONS: dict[str, tuple[float, float]] = {
    "e":   (1.0, 0.0),
    "3h":  (1.0, 0.0),
    "2h":  (R3_HALF, 0.5),
    "1h":  (0.5, R3_HALF),
    "n":   (0.0, 1.0),
    "12h": (0.0, 1.0),
    "11h": (-0.5, R3_HALF),
    "10h": (-R3_HALF, 0.5),
    "w":   (-1.0, 0.0),
    "9h":  (-1.0, 0.0),
    "8h":  (-R3_HALF, -0.5),
    "7h":  (-0.5, -R3_HALF),
    "s":   (0.0, -1.0),
    "6h":  (0.0, -1.0),
    "5h":  (0.5, -R3_HALF),
    "4h":  (R3_HALF, -0.5),
}

ANGLE_UNITS = {
    "deg": math.pi / 180,
    "°": math.pi / 180,
    "rad": 1.0,
}

_ANGLE_PATTERN = re.compile(
    r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(deg|°|rad)?\s*$"
)

_BEND_KEYS = ("bend", "bendAngle", "bend_angle", "angle")


@dataclass
class WedgeSpec:
    """One wedge of the star with its steps already resolved to vectors."""
    name: str
    angle_deficit: float  # radians
    steps: list[tuple[float, float]] = field(default_factory=list)

    @property
    def step_total(self) -> tuple[float, float]:
        """Displacement from the previous tip to this wedge's tip."""
        return (sum(s[0] for s in self.steps), sum(s[1] for s in self.steps))


@dataclass
class EdgeSpec:
    """
    An authored edge.

    Contracted edges run along the cut of a single wedge (from its apex to
    its tip); the other edges join two wedge apexes, possibly crossing
    other wedges on the way.
    """
    from_wedge: str
    to_wedge: str
    through: list[str] = field(default_factory=list)
    bend: float = 0.0  # radians, 0 = flat; sign selects the folding side
    contracted: bool = False

    @property
    def name(self) -> str:
        if self.contracted:
            return self.from_wedge
        return f"{self.from_wedge}-{self.to_wedge}"


@dataclass
class NetSpec:
    """A fully resolved net description."""
    wedges: list[WedgeSpec]
    edges: list[EdgeSpec]

    def wedge_index(self) -> dict[str, int]:
        return {w.name: i for i, w in enumerate(self.wedges)}


def parse_angle(value) -> float:
    """
    Convert an angle to radians.

    Plain numbers and unit-less strings are degrees.
    """
    if isinstance(value, bool):
        raise NetSpecError(f"Unexpected angle: {value!r}")
    if isinstance(value, (int, float)):
        return math.radians(value)
    if isinstance(value, dict):
        if "num" not in value:
            raise NetSpecError(f"Angle mapping needs a 'num' entry: {value!r}")
        unit = value.get("unit", "deg")
        if unit not in ANGLE_UNITS:
            raise NetSpecError(f"Unexpected angle unit '{unit}'")
        return float(value["num"]) * ANGLE_UNITS[unit]
    if isinstance(value, str):
        match = _ANGLE_PATTERN.match(value)
        if match is None:
            raise NetSpecError(f"Cannot parse angle '{value}'")
        number, unit = match.groups()
        return float(number) * ANGLE_UNITS[unit or "deg"]
    raise NetSpecError(f"Unexpected angle: {value!r}")


def direction_to_vector(direction: str) -> tuple[float, float]:
    """Unit vector of a short direction ("e", "n", "1h", ...)."""
    try:
        return DIRECTIONS[direction]
    except KeyError:
        raise NetSpecError(f"Unexpected direction: '{direction}'") from None


def step_to_vector(step) -> tuple[float, float]:
    """Resolve one step of the boundary walk to a 2D vector."""
    if isinstance(step, str):
        return direction_to_vector(step.strip())

    if isinstance(step, (tuple, list)):
        if len(step) != 2:
            raise NetSpecError(f"Step vectors need two coordinates: {step!r}")
        return (float(step[0]), float(step[1]))

    if isinstance(step, dict):
        if "x" in step and "y" in step:
            return (float(step["x"]), float(step["y"]))
        if "amount" in step and "direction" in step:
            amount = float(step["amount"])
            direction = step["direction"]
            if isinstance(direction, str) and direction.strip() in DIRECTIONS:
                dx, dy = DIRECTIONS[direction.strip()]
            else:
                angle = parse_angle(direction)
                dx, dy = math.cos(angle), math.sin(angle)
            return (dx * amount, dy * amount)

    raise NetSpecError(f"Cannot parse step {step!r}")


def parse_wedge(name: str, value) -> WedgeSpec:
    """Parse one wedge entry (mapping or abbreviated string)."""
    if isinstance(value, str):
        parts = value.split()
        if not parts:
            raise NetSpecError(f"Wedge '{name}' is empty")
        angle_deficit = parts.pop()
        value = {"angle_deficit": angle_deficit, "steps": parts}

    if not isinstance(value, dict):
        raise NetSpecError(f"Wedge '{name}' must be a mapping or a string, got {value!r}")

    if "angle_deficit" in value:
        angle_deficit = value["angle_deficit"]
    elif "angleDeficit" in value:
        angle_deficit = value["angleDeficit"]
    else:
        raise NetSpecError(f"Wedge '{name}' has no angle deficit")

    steps = [step_to_vector(s) for s in value.get("steps", [])]
    return WedgeSpec(name=name, angle_deficit=parse_angle(angle_deficit), steps=steps)


def parse_edge(value, wedge_names: set[str]) -> EdgeSpec:
    """Parse one edge entry (wedge name, mapping or abbreviated string)."""
    if isinstance(value, str):
        parts = value.split()
        if not parts:
            raise NetSpecError("Empty edge entry")
        if len(parts) == 1:
            name = parts[0]
            if name not in wedge_names:
                raise NetSpecError(f"Contracted edge references unknown wedge '{name}'")
            return EdgeSpec(from_wedge=name, to_wedge=name, contracted=True)
        if len(parts) < 3:
            raise NetSpecError(f"Edge '{value}' needs at least 'from to bend'")
        value = {
            "from": parts[0],
            "through": parts[1:-2],
            "to": parts[-2],
            "bend": parts[-1],
        }

    if not isinstance(value, dict):
        raise NetSpecError(f"Edge must be a wedge name or a mapping, got {value!r}")

    for key in ("from", "to"):
        if key not in value:
            raise NetSpecError(f"Edge {value!r} has no '{key}' entry")

    bend = None
    for key in _BEND_KEYS:
        if key in value:
            bend = value[key]
            break
    if bend is None:
        raise NetSpecError(f"Edge {value['from']}-{value['to']} has no bend angle")

    through = list(value.get("through") or [])
    for name in [value["from"], value["to"], *through]:
        if name not in wedge_names:
            raise NetSpecError(
                f"Edge {value['from']}-{value['to']} references unknown wedge '{name}'"
            )

    return EdgeSpec(
        from_wedge=value["from"],
        to_wedge=value["to"],
        through=through,
        bend=parse_angle(bend),
    )


def parse_net_spec(wedges, edges) -> NetSpec:
    """
    Resolve a net description into a NetSpec.

    Args:
        wedges: Mapping of wedge name to wedge entry (in walking order), or
            a list of (name, entry) pairs
        edges: List of edge entries

    Raises:
        NetSpecError: If the notation is malformed
    """
    items = list(wedges.items()) if isinstance(wedges, dict) else list(wedges)
    if not items:
        raise NetSpecError("A net needs at least one wedge")

    wedge_specs = []
    seen = set()
    for name, value in items:
        if name in seen:
            raise NetSpecError(f"Duplicate wedge name '{name}'")
        seen.add(name)
        wedge_specs.append(parse_wedge(name, value))

    edge_specs = [parse_edge(e, seen) for e in edges]
    return NetSpec(wedges=wedge_specs, edges=edge_specs)
