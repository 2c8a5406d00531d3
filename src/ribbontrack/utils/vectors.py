"""
Vector helpers - Small 3D vector operations on numpy arrays.

World frame conventions:
- +Y is up
- -Z is the canonical forward axis of every prefab
- X is the lateral (cross-track) axis
"""

import numpy as np

from ribbontrack.utils.exceptions import OutOfRangeQueryError

UP = np.array([0.0, 1.0, 0.0])
DOWN = np.array([0.0, -1.0, 0.0])
FORWARD = np.array([0.0, 0.0, -1.0])

# Overshoot past either end of [0, 1] that is clamped instead of rejected
QUERY_TOLERANCE = 1e-6


def normalize(v: np.ndarray) -> np.ndarray:
    """Return ``v`` scaled to unit length.
    
    Zero-length vectors are returned unchanged (as a copy).
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm == 0.0:
        return v.copy()
    return v / norm


def rotate_about_axis(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """Rotate vector(s) about a unit axis by ``angle`` radians.
    
    Right-handed rotation (Rodrigues' formula). Accepts a single vector
    of shape (3,) or a batch of shape (n, 3).
    
    Args:
        v: Vector or batch of vectors to rotate
        axis: Rotation axis (normalized internally)
        angle: Rotation angle in radians
        
    Returns:
        Rotated vector(s) with the same shape as ``v``
    """
    v = np.asarray(v, dtype=np.float64)
    k = normalize(axis)
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    
    k_cross_v = np.cross(k, v)
    k_dot_v = v @ k
    return (
        v * cos_a
        + k_cross_v * sin_a
        + np.multiply.outer(k_dot_v, k) * (1.0 - cos_a)
    )


def signed_yaw(heading: np.ndarray, reference: np.ndarray = FORWARD) -> float:
    """Signed rotation about the up axis that maps ``reference`` onto ``heading``.
    
    Both vectors are projected onto the ground plane first.
    
    Args:
        heading: Target direction
        reference: Direction being rotated (canonical forward by default)
        
    Returns:
        Yaw angle in radians, in (-pi, pi]
    """
    h = np.array(heading, dtype=np.float64)
    r = np.array(reference, dtype=np.float64)
    h[1] = 0.0
    r[1] = 0.0
    
    sin_part = np.dot(np.cross(h, r), DOWN)
    cos_part = np.dot(r, h)
    return float(np.arctan2(sin_part, cos_part))


def clamp_parameter(t: float) -> float:
    """Clamp a curve parameter to ``[0, 1]``.
    
    Floating-point overshoot within ``QUERY_TOLERANCE`` snaps to the
    nearest end; anything further out is rejected.
    
    Raises:
        OutOfRangeQueryError: If ``t`` is non-finite or too far outside
            the unit interval.
    """
    t = float(t)
    if not np.isfinite(t) or t < -QUERY_TOLERANCE or t > 1.0 + QUERY_TOLERANCE:
        raise OutOfRangeQueryError(f"Path parameter must lie in [0, 1], got {t!r}")
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    return t
