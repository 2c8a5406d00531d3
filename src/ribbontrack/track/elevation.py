"""
Elevation profile - Smooth height curve over the whole track.

Height is independent of the planar path shape: one control point per
segment boundary, placed at evenly spaced parameters ``i / N`` and joined
by an open Catmull-Rom spline.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ribbontrack.utils.exceptions import DegenerateParameterError

DEFAULT_TENSION = 0.5


def draw_heights(
    count: int,
    min_delta: float,
    max_delta: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw a random height profile for ``count`` segments.
    
    The first height is always 0 (ground reference). Every following
    height adds a uniform random delta from ``[min_delta, max_delta]``.
    
    Args:
        count: Number of segments
        min_delta: Smallest per-segment height change (may be negative)
        max_delta: Largest per-segment height change
        rng: Random source
        
    Returns:
        Array of ``count + 1`` heights
    """
    if count < 1:
        raise DegenerateParameterError("Height profile needs at least one segment")
    if min_delta > max_delta:
        raise DegenerateParameterError("min_delta must not exceed max_delta")
    
    deltas = rng.uniform(min_delta, max_delta, size=count)
    heights = np.zeros(count + 1, dtype=np.float64)
    heights[1:] = np.cumsum(deltas)
    return heights


@dataclass(frozen=True, eq=False)
class ElevationProfile:
    """Open Catmull-Rom curve through (i / N, height) control points.
    
    Higher tension gives larger end tangents and more overshoot between
    control points; zero tension flattens every control point into a
    local extremum.
    """
    heights: np.ndarray
    tension: float = DEFAULT_TENSION
    
    def __post_init__(self):
        heights = np.array(self.heights, dtype=np.float64)
        if heights.ndim != 1 or heights.size < 2:
            raise DegenerateParameterError("Elevation profile needs at least two control points")
        if not np.all(np.isfinite(heights)):
            raise DegenerateParameterError("Elevation heights must be finite")
        if not np.isfinite(self.tension):
            raise DegenerateParameterError("Elevation tension must be finite")
        heights.setflags(write=False)
        object.__setattr__(self, "heights", heights)
    
    @classmethod
    def random(
        cls,
        count: int,
        min_delta: float,
        max_delta: float,
        rng: np.random.Generator,
        tension: float = DEFAULT_TENSION,
    ) -> "ElevationProfile":
        """Build a profile from freshly drawn heights."""
        return cls(draw_heights(count, min_delta, max_delta, rng), tension)
    
    @classmethod
    def from_segment_heights(
        cls, enter_heights: Sequence[float], exit_height: float, tension: float = DEFAULT_TENSION
    ) -> "ElevationProfile":
        """Build a profile from each segment's entry height plus the final exit."""
        return cls(np.append(np.asarray(enter_heights, dtype=np.float64), exit_height), tension)
    
    @property
    def control_points(self) -> np.ndarray:
        """(N + 1, 2) array of (t, height) control points."""
        count = self.heights.size
        ts = np.arange(count, dtype=np.float64) / (count - 1)
        return np.column_stack([ts, self.heights])
    
    def with_tension(self, tension: float) -> "ElevationProfile":
        """Re-fit the same heights with a different tension."""
        return ElevationProfile(self.heights, tension)
    
    def height_at(self, t: float) -> float:
        """Evaluate the height curve at parameter ``t`` in [0, 1]."""
        heights = self.heights
        count = heights.size
        
        p = (count - 1) * t
        index = int(np.floor(p))
        weight = p - index
        
        if index >= count - 1:
            index = count - 2
            weight = 1.0
        elif index < 0:
            index = 0
            weight = 0.0
        
        p1 = heights[index]
        p2 = heights[index + 1]
        # Open ends reflect the neighbouring point
        p0 = heights[index - 1] if index > 0 else 2.0 * p1 - p2
        p3 = heights[index + 2] if index + 2 < count else 2.0 * p2 - p1
        
        return _catmull_rom(p0, p1, p2, p3, self.tension, weight)


def _catmull_rom(p0: float, p1: float, p2: float, p3: float, tension: float, w: float) -> float:
    """Cubic Hermite segment between p1 and p2 with Catmull-Rom tangents."""
    t0 = tension * (p2 - p0)
    t1 = tension * (p3 - p1)
    
    c0 = p1
    c1 = t0
    c2 = -3.0 * p1 + 3.0 * p2 - 2.0 * t0 - t1
    c3 = 2.0 * p1 - 2.0 * p2 + t0 + t1
    return float(c0 + w * (c1 + w * (c2 + w * c3)))
