"""Tests for vector helpers."""

import pytest
import numpy as np

from ribbontrack.utils.exceptions import OutOfRangeQueryError
from ribbontrack.utils.vectors import (
    FORWARD,
    UP,
    clamp_parameter,
    normalize,
    rotate_about_axis,
    signed_yaw,
)


class TestVectors:
    """Test rotation, yaw and parameter clamping."""
    
    def test_rotate_forward_about_up(self):
        """Test a quarter turn about up maps forward (-z) to -x."""
        rotated = rotate_about_axis(FORWARD, UP, np.pi / 2)
        
        assert np.allclose(rotated, [-1.0, 0.0, 0.0])
    
    def test_rotate_batch(self):
        """Test rotating several vectors at once."""
        points = np.array([[1.0, 0.0, 0.0], [0.0, 0.0, -1.0], [0.0, 0.0, 0.0]])
        
        rotated = rotate_about_axis(points, UP, np.pi)
        
        assert np.allclose(rotated, [[-1.0, 0.0, 0.0], [0.0, 0.0, 1.0], [0.0, 0.0, 0.0]])
    
    @pytest.mark.parametrize(
        "heading, expected",
        [
            ((0.0, 0.0, -1.0), 0.0),
            ((-1.0, 0.0, 0.0), np.pi / 2),
            ((1.0, 0.0, 0.0), -np.pi / 2),
            ((0.0, 0.0, 1.0), np.pi),
        ],
    )
    def test_signed_yaw(self, heading, expected):
        """Test yaw that aligns the canonical forward axis with a heading."""
        yaw = signed_yaw(np.array(heading))
        
        assert np.allclose([np.cos(yaw), np.sin(yaw)], [np.cos(expected), np.sin(expected)])
        assert np.allclose(rotate_about_axis(FORWARD, UP, yaw), heading)
    
    def test_normalize_zero_vector(self):
        """Test normalizing a zero vector does not divide by zero."""
        assert np.array_equal(normalize(np.zeros(3)), np.zeros(3))
    
    def test_clamp_parameter(self):
        """Test boundary overshoot snaps and far values raise."""
        assert clamp_parameter(1.0 + 1e-10) == 1.0
        assert clamp_parameter(-1e-10) == 0.0
        assert clamp_parameter(0.25) == 0.25
        with pytest.raises(OutOfRangeQueryError):
            clamp_parameter(1.01)
        with pytest.raises(OutOfRangeQueryError):
            clamp_parameter(float("inf"))
