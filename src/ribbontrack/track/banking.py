"""
Banking field - Roll of the track surface along the whole path.

Each segment's local banking normals are remapped into the segment's
arc-length slice of global [0, 1] and merged into one ascending list.
Normals between keyframes are linearly interpolated.
"""

import bisect
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ribbontrack.track.path import CompositePath
from ribbontrack.track.segment import PlacedSegment
from ribbontrack.utils.exceptions import DegenerateParameterError
from ribbontrack.utils.vectors import clamp_parameter, normalize


@dataclass(frozen=True, eq=False)
class GlobalKeyframe:
    """Banking normal at a global path parameter."""
    t: float
    normal: np.ndarray


class BankingField:
    """Sorted (global t, normal) keyframes with interpolated lookup.
    
    Invariants: keyframe ``t`` is strictly ascending, the first keyframe
    sits at 0 and the last at 1.
    """
    
    def __init__(self, keyframes: Sequence[GlobalKeyframe]):
        """Wrap an already ordered keyframe list.
        
        Raises:
            DegenerateParameterError: If keyframes are missing, unsorted or
                do not cover [0, 1].
        """
        keyframes = tuple(keyframes)
        if len(keyframes) < 2:
            raise DegenerateParameterError("Banking field needs at least two keyframes")
        
        ts = [k.t for k in keyframes]
        if ts[0] != 0.0 or ts[-1] != 1.0:
            raise DegenerateParameterError("Banking keyframes must span t = 0 to t = 1")
        if any(b <= a for a, b in zip(ts, ts[1:])):
            raise DegenerateParameterError("Banking keyframe t must be strictly ascending")
        
        self._keyframes = keyframes
        self._ts = ts
    
    @classmethod
    def from_segments(cls, segments: Sequence[PlacedSegment], path: CompositePath) -> "BankingField":
        """Remap every segment's local keyframes into global t.
        
        Where a segment's t = 1 keyframe lands on the same global t as the
        next segment's t = 0 keyframe, the later segment's keyframe wins.
        
        Args:
            segments: Placed segments in travel order
            path: Path built from the same segments
        """
        keyframes: List[GlobalKeyframe] = []
        
        for i, segment in enumerate(segments):
            start, end = path.segment_span(i)
            for bank in segment.normals:
                # Exact at both ends of the span
                t = start * (1.0 - bank.t) + end * bank.t
                keyframe = GlobalKeyframe(t, np.asarray(bank.normal, dtype=np.float64))
                if keyframes and t <= keyframes[-1].t:
                    keyframes[-1] = keyframe
                else:
                    keyframes.append(keyframe)
        
        return cls(keyframes)
    
    @property
    def keyframes(self) -> Tuple[GlobalKeyframe, ...]:
        return self._keyframes
    
    def bounds(self, t: float) -> Tuple[int, int]:
        """Indices of the keyframes bracketing ``t``.
        
        Returns:
            Tuple of (lower index, upper index)
        """
        t = clamp_parameter(t)
        if t == 1.0:
            upper = len(self._ts) - 1
        else:
            upper = bisect.bisect_right(self._ts, t)
        return (upper - 1, upper)
    
    def normal_at(self, t: float) -> np.ndarray:
        """Interpolated unit banking normal at global parameter ``t``."""
        t = clamp_parameter(t)
        lower, upper = self.bounds(t)
        
        lower_t = self._ts[lower]
        upper_t = self._ts[upper]
        lower_n = self._keyframes[lower].normal
        upper_n = self._keyframes[upper].normal
        
        if upper_t <= lower_t:
            return normalize(lower_n)
        
        local_t = (t - lower_t) / (upper_t - lower_t)
        return normalize(lower_n + (upper_n - lower_n) * local_t)
