"""
Placed segment - A prefab instantiated into world space.

Defines:
- World-space banking normals at local curve parameters
- Placed segment geometry (world Bezier curve) and entry/exit heights
"""

from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np

from ribbontrack.track.bezier import CubicBezier


@dataclass(frozen=True, eq=False)
class BankNormal:
    """World-space banking normal at a local curve parameter."""
    t: float              # Arc-length fraction within the segment, 0-1
    normal: np.ndarray    # Unit vector


@dataclass(frozen=True, eq=False)
class PlacedSegment:
    """A single piece of the track in world space.
    
    Segments are created once per generation pass and never mutated;
    height regeneration produces new segments that share the same curve.
    """
    # Identification
    name: str
    
    # Geometry
    curve: CubicBezier
    normals: Tuple[BankNormal, ...]
    scale: float = 1.0
    
    # Vertical profile (filled in by height generation)
    enter_height: float = 0.0
    exit_height: float = 0.0
    
    @property
    def start(self) -> np.ndarray:
        """World position of the segment entry."""
        return self.curve.start
    
    @property
    def end(self) -> np.ndarray:
        """World position of the segment exit."""
        return self.curve.end
    
    @property
    def exit_heading(self) -> np.ndarray:
        """Unit direction of travel at the segment exit."""
        points = self.curve.control_points
        direction = points[3] - points[2]
        return direction / np.linalg.norm(direction)
    
    @property
    def length(self) -> float:
        """Planar arc length of the segment."""
        return self.curve.length
    
    @property
    def elevation_change(self) -> float:
        """Height difference across the segment (positive = uphill)."""
        return self.exit_height - self.enter_height
    
    def with_heights(self, enter_height: float, exit_height: float) -> "PlacedSegment":
        """Copy of this segment with new entry/exit heights."""
        return replace(self, enter_height=float(enter_height), exit_height=float(exit_height))
    
    def get_state(self) -> dict:
        """Get segment state for serialization.
        
        Returns:
            Dictionary containing segment data
        """
        return {
            "name": self.name,
            "scale": self.scale,
            "length": self.length,
            "start": tuple(float(v) for v in self.start),
            "end": tuple(float(v) for v in self.end),
            "enter_height": self.enter_height,
            "exit_height": self.exit_height,
            "bank_keyframes": len(self.normals),
        }
