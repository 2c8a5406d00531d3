"""
Cubic Bezier curve - Single curve piece with arc-length parametrization.

Provides:
- Raw evaluation at the Bezier parameter
- Arc-length lookup table and reparametrization
- Point and tangent queries at equal-distance parameters
"""

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ribbontrack.utils.vectors import normalize

ARC_LENGTH_DIVISIONS = 200
TANGENT_DELTA = 1e-4


@dataclass(frozen=True, eq=False)
class CubicBezier:
    """Cubic Bezier curve defined by four 3D control points.
    
    Two parametrizations are exposed:
    - ``u`` (``get_point``/``get_tangent``): the raw Bezier parameter
    - ``t`` (``point_at``/``tangent_at``): fraction of arc length, so equal
      steps in ``t`` cover equal distances along the curve
    """
    control_points: np.ndarray
    _lengths: np.ndarray = field(init=False, repr=False)
    
    def __post_init__(self):
        points = np.array(self.control_points, dtype=np.float64)
        if points.shape != (4, 3):
            raise ValueError(f"Cubic Bezier needs 4 control points, got shape {points.shape}")
        points.setflags(write=False)
        object.__setattr__(self, "control_points", points)
        object.__setattr__(self, "_lengths", self._compute_lengths())
    
    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]]) -> "CubicBezier":
        return cls(np.asarray(points, dtype=np.float64))
    
    @property
    def start(self) -> np.ndarray:
        return self.control_points[0]
    
    @property
    def end(self) -> np.ndarray:
        return self.control_points[3]
    
    @property
    def length(self) -> float:
        """Approximate arc length (sum of chord lengths of the lookup table)."""
        return float(self._lengths[-1])
    
    def get_point(self, u) -> np.ndarray:
        """Evaluate the curve at raw Bezier parameter(s) ``u``.
        
        Args:
            u: Scalar or array of parameters in [0, 1]
            
        Returns:
            Point of shape (3,) or (n, 3)
        """
        u = np.asarray(u, dtype=np.float64)
        s = 1.0 - u
        weights = np.stack([s * s * s, 3.0 * s * s * u, 3.0 * s * u * u, u * u * u], axis=-1)
        return weights @ self.control_points
    
    def get_tangent(self, u: float) -> np.ndarray:
        """Unit tangent at raw parameter ``u`` (central finite difference).
        
        Defined at ends where coincident control points zero the derivative.
        """
        u1 = max(u - TANGENT_DELTA, 0.0)
        u2 = min(u + TANGENT_DELTA, 1.0)
        return normalize(self.get_point(u2) - self.get_point(u1))
    
    def _compute_lengths(self) -> np.ndarray:
        samples = self.get_point(np.linspace(0.0, 1.0, ARC_LENGTH_DIVISIONS + 1))
        chords = np.linalg.norm(np.diff(samples, axis=0), axis=1)
        lengths = np.zeros(ARC_LENGTH_DIVISIONS + 1, dtype=np.float64)
        lengths[1:] = np.cumsum(chords)
        return lengths
    
    def u_to_t_mapping(self, t: float) -> float:
        """Map an arc-length fraction ``t`` to the raw Bezier parameter.
        
        Args:
            t: Fraction of the curve's arc length in [0, 1]
            
        Returns:
            Raw parameter ``u`` in [0, 1]
        """
        lengths = self._lengths
        total = lengths[-1]
        if total <= 0.0:
            return float(t)
        
        target = t * total
        count = lengths.size
        
        # Last table entry not exceeding the target distance
        i = int(np.searchsorted(lengths, target, side="right")) - 1
        i = min(max(i, 0), count - 2)
        
        if lengths[i] == target:
            return i / (count - 1)
        
        segment_length = lengths[i + 1] - lengths[i]
        fraction = (target - lengths[i]) / segment_length if segment_length > 0 else 0.0
        return min((i + fraction) / (count - 1), 1.0)
    
    def point_at(self, t: float) -> np.ndarray:
        """Point at arc-length fraction ``t``."""
        return self.get_point(self.u_to_t_mapping(t))
    
    def tangent_at(self, t: float) -> np.ndarray:
        """Unit tangent at arc-length fraction ``t``."""
        return self.get_tangent(self.u_to_t_mapping(t))
