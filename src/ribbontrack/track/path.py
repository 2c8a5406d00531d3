"""
Composite path - Segment curves joined into one arc-length parametrized path.

Provides:
- Total and cumulative segment arc lengths
- Mapping between global t in [0, 1] and (segment index, local t)
- Planar point and tangent lookup at global t
"""

import bisect
from typing import List, Sequence, Tuple

import numpy as np

from ribbontrack.track.bezier import CubicBezier
from ribbontrack.utils.exceptions import DegenerateParameterError
from ribbontrack.utils.vectors import clamp_parameter


class CompositePath:
    """Ordered sequence of Bezier curves treated as a single curve.
    
    Global ``t`` is proportional to distance travelled: equal increments
    of ``t`` cover equal arc length regardless of which segment they
    fall in.
    """
    
    def __init__(self, curves: Sequence[CubicBezier]):
        """Build the path.
        
        Args:
            curves: Curves in travel order
            
        Raises:
            DegenerateParameterError: If there are no curves or the total
                length is zero.
        """
        if not curves:
            raise DegenerateParameterError("Path needs at least one curve")
        
        self._curves: Tuple[CubicBezier, ...] = tuple(curves)
        self._cumulative: List[float] = np.cumsum([c.length for c in self._curves]).tolist()
        
        if self._cumulative[-1] <= 0.0:
            raise DegenerateParameterError("Path has zero length")
    
    @property
    def curves(self) -> Tuple[CubicBezier, ...]:
        return self._curves
    
    @property
    def num_curves(self) -> int:
        return len(self._curves)
    
    def global_length(self) -> float:
        """Total arc length of the path."""
        return self._cumulative[-1]
    
    def cumulative_lengths(self) -> List[float]:
        """Cumulative arc length at the end of each segment.
        
        Returns:
            One entry per segment, non-decreasing, last = total length
        """
        return list(self._cumulative)
    
    def segment_span(self, index: int) -> Tuple[float, float]:
        """Fraction of the total length covered by segment ``index``.
        
        Returns:
            Tuple of (start fraction, end fraction)
        """
        length = self.global_length()
        start = self._cumulative[index - 1] / length if index > 0 else 0.0
        end = 1.0 if index == len(self._cumulative) - 1 else self._cumulative[index] / length
        return (start, end)
    
    def locate(self, t: float) -> Tuple[int, float]:
        """Find the segment owning global parameter ``t``.
        
        Args:
            t: Global parameter in [0, 1]
            
        Returns:
            Tuple of (segment index, local arc-length fraction)
        """
        t = clamp_parameter(t)
        distance = t * self.global_length()
        cumulative = self._cumulative
        
        # First segment whose end reaches the target distance
        index = bisect.bisect_left(cumulative, distance)
        if index >= len(cumulative) or t == 1.0:
            return (len(cumulative) - 1, 1.0)
        
        seg_start = cumulative[index - 1] if index > 0 else 0.0
        seg_length = cumulative[index] - seg_start
        if seg_length <= 0.0:
            return (index, 0.0)
        
        local_t = (distance - seg_start) / seg_length
        return (index, min(max(local_t, 0.0), 1.0))
    
    def position_at(self, t: float) -> np.ndarray:
        """Planar point at global parameter ``t``."""
        index, local_t = self.locate(t)
        return self._curves[index].point_at(local_t)
    
    def tangent_at(self, t: float) -> np.ndarray:
        """Unit tangent at global parameter ``t``."""
        index, local_t = self.locate(t)
        return self._curves[index].tangent_at(local_t)
