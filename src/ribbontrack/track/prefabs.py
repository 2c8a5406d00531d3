"""
Segment prefabs - Reusable local-space curve templates.

Defines:
- Bank keyframes (local parameter + bank angle)
- Segment prefabs (cubic Bezier control points + bank keyframes)
- Mirroring of prefabs into their opposite-hand variants
- The default catalog of named prefabs

Local frame: the entry point is the origin and the entry tangent is the
canonical forward axis (-Z). X is the lateral axis.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Tuple

import numpy as np

from ribbontrack.utils.exceptions import DegenerateParameterError, UnknownPrefabError

LATERAL_AXIS = 0
MIRRORED_SUFFIX = "Mirrored"


@dataclass(frozen=True)
class BankKeyframe:
    """Bank angle at a local curve parameter."""
    t: float        # Arc-length fraction within the piece, 0-1
    angle: float    # Radians of rotation of "up" about the tangent


@dataclass(frozen=True, eq=False)
class SegmentPrefab:
    """Immutable template for one track piece.
    
    Attributes:
        name: Catalog name of the piece
        control_points: (4, 3) cubic Bezier control points in local space
        bank_keyframes: Ascending keyframes, always starting at t = 0
    """
    name: str
    control_points: np.ndarray
    bank_keyframes: Tuple[BankKeyframe, ...]
    
    def __post_init__(self):
        points = np.array(self.control_points, dtype=np.float64)
        if points.shape != (4, 3):
            raise DegenerateParameterError(
                f"Prefab {self.name!r} needs 4 control points, got shape {points.shape}"
            )
        points.setflags(write=False)
        object.__setattr__(self, "control_points", points)
        
        keyframes = tuple(self.bank_keyframes)
        object.__setattr__(self, "bank_keyframes", keyframes)
        self.validate()
    
    def validate(self) -> None:
        """Check keyframe ordering and range.
        
        Raises:
            DegenerateParameterError: If keyframes are empty, unsorted,
                out of [0, 1] or do not start at t = 0.
        """
        keyframes = self.bank_keyframes
        if not keyframes:
            raise DegenerateParameterError(f"Prefab {self.name!r} has no bank keyframes")
        if keyframes[0].t != 0.0:
            raise DegenerateParameterError(f"Prefab {self.name!r} must have a keyframe at t=0")
        for prev, cur in zip(keyframes, keyframes[1:]):
            if cur.t <= prev.t:
                raise DegenerateParameterError(
                    f"Prefab {self.name!r} keyframes must be strictly ascending"
                )
        if keyframes[-1].t > 1.0:
            raise DegenerateParameterError(f"Prefab {self.name!r} keyframe t exceeds 1")
    
    @property
    def has_end_keyframe(self) -> bool:
        """True when the prefab defines banking at t = 1 itself."""
        return self.bank_keyframes[-1].t == 1.0


def mirror(prefab: SegmentPrefab, name: str | None = None) -> SegmentPrefab:
    """Reflect a prefab across its forward axis.
    
    Negates the lateral coordinate of every control point and every bank
    angle. Forward direction and arc length are preserved, and mirroring
    twice gives back the original geometry.
    
    Args:
        prefab: Prefab to reflect
        name: Name for the result (defaults to the left/right swapped name)
        
    Returns:
        New mirrored prefab
    """
    points = prefab.control_points.copy()
    points[:, LATERAL_AXIS] = -points[:, LATERAL_AXIS]
    
    keyframes = tuple(BankKeyframe(k.t, -k.angle) for k in prefab.bank_keyframes)
    return SegmentPrefab(
        name=name or mirrored_name(prefab.name),
        control_points=points,
        bank_keyframes=keyframes,
    )


def mirrored_name(name: str) -> str:
    """Swap a leading ``left``/``right`` in a prefab name."""
    if name.startswith("left"):
        return "right" + name[len("left"):]
    if name.startswith("right"):
        return "left" + name[len("right"):]
    if name.endswith(MIRRORED_SUFFIX):
        return name[:-len(MIRRORED_SUFFIX)]
    return name + MIRRORED_SUFFIX


class PrefabCatalog(Mapping[str, SegmentPrefab]):
    """Read-only name -> prefab table.
    
    Built once from base prefabs; every ``left*`` prefab without an
    explicit ``right*`` counterpart gets one by mirroring.
    """
    
    def __init__(self, prefabs: Mapping[str, SegmentPrefab] | None = None, add_mirrors: bool = True):
        table: Dict[str, SegmentPrefab] = dict(prefabs or {})
        
        if add_mirrors:
            for name, prefab in list(table.items()):
                if not name.startswith("left"):
                    continue
                twin = mirrored_name(name)
                if twin not in table:
                    table[twin] = mirror(prefab, twin)
        
        self._prefabs = MappingProxyType(table)
    
    def __getitem__(self, name: str) -> SegmentPrefab:
        return self.lookup(name)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._prefabs)
    
    def __len__(self) -> int:
        return len(self._prefabs)
    
    @property
    def names(self) -> Tuple[str, ...]:
        """Catalog names in definition order."""
        return tuple(self._prefabs)
    
    def lookup(self, name: str) -> SegmentPrefab:
        """Get a prefab by name.
        
        Raises:
            UnknownPrefabError: If ``name`` is not in the catalog.
        """
        try:
            return self._prefabs[name]
        except KeyError:
            raise UnknownPrefabError(name) from None


def _keyframes(*pairs: Tuple[float, float]) -> Tuple[BankKeyframe, ...]:
    """Build keyframes from (t, angle in degrees) pairs."""
    return tuple(BankKeyframe(t, float(np.radians(angle_deg))) for t, angle_deg in pairs)


BASE_PREFABS: Dict[str, SegmentPrefab] = {
    "leftTurn": SegmentPrefab(
        name="leftTurn",
        control_points=[(0, 0, 0), (0, 0, 0), (0, 0, -1), (-1, 0, -1)],
        bank_keyframes=_keyframes((0.0, 0.0), (0.4, -40.0), (0.6, -40.0)),
    ),
    "rightTurn": SegmentPrefab(
        name="rightTurn",
        control_points=[(0, 0, 0), (0, 0, 0), (0, 0, -1), (1, 0, -1)],
        bank_keyframes=_keyframes((0.0, 0.0), (0.4, 25.0), (0.6, 25.0)),
    ),
    "leftUTurn": SegmentPrefab(
        name="leftUTurn",
        control_points=[(0, 0, 0), (0, 0, -2), (-2, 0, -2), (-2, 0, 0)],
        bank_keyframes=_keyframes((0.0, 0.0), (0.5, -45.0)),
    ),
    "straight": SegmentPrefab(
        name="straight",
        control_points=[(0, 0, 0), (0, 0, 0), (0, 0, 0), (0, 0, -1)],
        bank_keyframes=_keyframes((0.0, 0.0)),
    ),
}

DEFAULT_CATALOG = PrefabCatalog(BASE_PREFABS)


def lookup(name: str) -> SegmentPrefab:
    """Look up a prefab in the default catalog.
    
    Raises:
        UnknownPrefabError: If ``name`` is not a known prefab.
    """
    return DEFAULT_CATALOG.lookup(name)
