"""
Track - Query facade over a composed, banked, elevated path.

Contains:
- Planar composite path (position and tangent)
- Elevation profile (height channel)
- Banking field (surface normal)
- Sampling helpers for centerline and normal visualisation
"""

from numbers import Integral
from typing import List, Sequence, Tuple

import numpy as np

from ribbontrack.track.banking import BankingField, GlobalKeyframe
from ribbontrack.track.elevation import DEFAULT_TENSION, ElevationProfile
from ribbontrack.track.path import CompositePath
from ribbontrack.track.segment import PlacedSegment
from ribbontrack.utils.exceptions import DegenerateParameterError
from ribbontrack.utils.vectors import clamp_parameter

DEFAULT_DIVISIONS_PER_CURVE = 24
HEIGHT_AXIS = 1


class Track:
    """Complete banked track built from placed segments.
    
    A track is an immutable snapshot: every derived structure is built in
    the constructor, and changing tension or sampling density produces a
    new ``Track`` via ``resample``.
    
    Usage:
        track = Track(segments, tension=0.5, divisions_per_curve=24)
        
        pos = track.position_at(0.5)
        normal = track.normal_at(0.5)
    """
    
    def __init__(
        self,
        segments: Sequence[PlacedSegment],
        tension: float = DEFAULT_TENSION,
        divisions_per_curve: int = DEFAULT_DIVISIONS_PER_CURVE,
    ):
        """Build path, banking field and elevation profile.
        
        Args:
            segments: Placed segments in travel order
            tension: Catmull-Rom tension of the height curve
            divisions_per_curve: Sampling density per segment
            
        Raises:
            DegenerateParameterError: If there are no segments or the
                sampling density is not positive.
        """
        if not segments:
            raise DegenerateParameterError("Track needs at least one segment")
        if not isinstance(divisions_per_curve, Integral) or divisions_per_curve < 1:
            raise DegenerateParameterError("divisions_per_curve must be a positive integer")
        
        self._segments: Tuple[PlacedSegment, ...] = tuple(segments)
        self.tension = float(tension)
        self.divisions_per_curve = int(divisions_per_curve)
        
        self._path = CompositePath([s.curve for s in self._segments])
        self._banking = BankingField.from_segments(self._segments, self._path)
        self._elevation = ElevationProfile.from_segment_heights(
            [s.enter_height for s in self._segments],
            self._segments[-1].exit_height,
            self.tension,
        )
    
    @property
    def segments(self) -> Tuple[PlacedSegment, ...]:
        """Track segments in travel order."""
        return self._segments
    
    @property
    def num_segments(self) -> int:
        """Number of segments."""
        return len(self._segments)
    
    @property
    def divisions(self) -> int:
        """Total sampling steps over the whole track."""
        return self.num_segments * self.divisions_per_curve
    
    @property
    def length(self) -> float:
        """Planar arc length of the whole track."""
        return self._path.global_length()
    
    @property
    def path(self) -> CompositePath:
        return self._path
    
    @property
    def banking(self) -> BankingField:
        return self._banking
    
    @property
    def elevation(self) -> ElevationProfile:
        return self._elevation
    
    @property
    def keyframes(self) -> Tuple[GlobalKeyframe, ...]:
        """Global banking keyframes."""
        return self._banking.keyframes
    
    def resample(
        self,
        tension: float | None = None,
        divisions_per_curve: int | None = None,
    ) -> "Track":
        """New track over the same segments with different sampling settings."""
        return Track(
            self._segments,
            tension=self.tension if tension is None else tension,
            divisions_per_curve=(
                self.divisions_per_curve if divisions_per_curve is None else divisions_per_curve
            ),
        )
    
    def height_at(self, t: float) -> float:
        """Elevation at global parameter ``t``."""
        return self._elevation.height_at(clamp_parameter(t))
    
    def position_at(self, t: float) -> np.ndarray:
        """World position at global parameter ``t``.
        
        The planar path position with its height replaced by the
        elevation profile.
        """
        t = clamp_parameter(t)
        position = self._path.position_at(t).copy()
        position[HEIGHT_AXIS] = self._elevation.height_at(t)
        return position
    
    def tangent_at(self, t: float) -> np.ndarray:
        """Unit tangent of the planar path at ``t``.
        
        Elevation does not tilt the tangent.
        """
        return self._path.tangent_at(t)
    
    def normal_at(self, t: float) -> np.ndarray:
        """Banking normal at ``t``."""
        return self._banking.normal_at(t)
    
    def sample_parameters(self, divisions: int | None = None) -> np.ndarray:
        """Evenly spaced global parameters from 0 to 1 inclusive."""
        if divisions is None:
            divisions = self.divisions
        if divisions < 1:
            raise DegenerateParameterError("divisions must be at least 1")
        return np.arange(divisions + 1, dtype=np.float64) / divisions
    
    def sample_centerline(self, divisions: int | None = None) -> np.ndarray:
        """Centerline polyline.
        
        Args:
            divisions: Number of steps (defaults to ``self.divisions``)
            
        Returns:
            (divisions + 1, 3) array of positions
        """
        return np.array([self.position_at(t) for t in self.sample_parameters(divisions)])
    
    def normal_guides(self, scale: float = 0.25) -> Tuple[np.ndarray, np.ndarray]:
        """Short line segments visualising the banking normals.
        
        Args:
            scale: Length of each guide line
            
        Returns:
            Tuple of (keyframe guides, sampled guides), each an (n, 2, 3)
            array of [start, end] points
        """
        def guides(ts: Sequence[float]) -> np.ndarray:
            lines: List[np.ndarray] = []
            for t in ts:
                pos = self.position_at(t)
                lines.append(np.stack([pos, pos + self.normal_at(t) * scale]))
            return np.array(lines)
        
        keyframe_guides = guides([k.t for k in self.keyframes])
        sampled_guides = guides(self.sample_parameters())
        return keyframe_guides, sampled_guides
    
    def get_state(self) -> dict:
        """Get track summary for logging and inspection.
        
        Returns:
            Dictionary with track metadata
        """
        heights = self._elevation.heights
        return {
            "num_segments": self.num_segments,
            "pieces": [s.name for s in self._segments],
            "length": self.length,
            "divisions": self.divisions,
            "tension": self.tension,
            "bank_keyframes": len(self.keyframes),
            "min_height": float(heights.min()),
            "max_height": float(heights.max()),
            "end_position": tuple(float(v) for v in self.position_at(1.0)),
        }
