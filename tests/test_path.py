"""Tests for the composite path."""

import pytest
import numpy as np

from ribbontrack.track.bezier import CubicBezier
from ribbontrack.track.generator import GenerationParameters, compose_segments
from ribbontrack.track.path import CompositePath
from ribbontrack.utils.exceptions import DegenerateParameterError, OutOfRangeQueryError

UNSCALED = GenerationParameters(min_scale=1.0, max_scale=1.0)


def line(start_z, end_z):
    """Uniformly parametrized straight curve along z."""
    zs = np.linspace(start_z, end_z, 4)
    return CubicBezier.from_points([(0.0, 0.0, z) for z in zs])


class TestCompositePath:
    """Test path aggregation and global parametrization."""
    
    def test_lengths(self):
        """Test total and cumulative lengths."""
        path = CompositePath([line(0.0, -1.0), line(-1.0, -4.0)])
        
        assert path.global_length() == pytest.approx(4.0)
        assert path.cumulative_lengths() == pytest.approx([1.0, 4.0])
    
    def test_locate_uses_arc_length(self):
        """Test global t maps to segments in proportion to their length."""
        path = CompositePath([line(0.0, -1.0), line(-1.0, -4.0)])
        
        assert path.locate(0.0) == (0, 0.0)
        index, local_t = path.locate(0.5)
        assert index == 1
        assert local_t == pytest.approx(1.0 / 3.0)
        assert np.allclose(path.position_at(0.5), [0.0, 0.0, -2.0])
    
    def test_end_resolves_to_last_segment(self):
        """Test t = 1 maps to the end of the last segment."""
        path = CompositePath([line(0.0, -1.0), line(-1.0, -4.0)])
        
        assert path.locate(1.0) == (1, 1.0)
        assert np.allclose(path.position_at(1.0), [0.0, 0.0, -4.0])
    
    def test_overshoot_is_clamped(self):
        """Test tiny floating-point overshoot is treated as the endpoint."""
        path = CompositePath([line(0.0, -1.0)])
        
        assert path.locate(1.0 + 1e-12) == (0, 1.0)
        assert path.locate(-1e-12) == (0, 0.0)
    
    def test_out_of_range_query(self):
        """Test queries well outside [0, 1] are rejected."""
        path = CompositePath([line(0.0, -1.0)])
        
        with pytest.raises(OutOfRangeQueryError):
            path.position_at(1.5)
        with pytest.raises(OutOfRangeQueryError):
            path.tangent_at(float("nan"))
    
    def test_empty_path(self):
        """Test a path needs at least one curve."""
        with pytest.raises(DegenerateParameterError):
            CompositePath([])
    
    def test_sampled_queries_are_defined(self):
        """Test every sampled t yields a finite position and unit tangent."""
        segments = compose_segments(["leftTurn", "straight", "rightUTurn", "leftTurn"], UNSCALED)
        path = CompositePath([s.curve for s in segments])
        divisions = len(segments) * 24
        
        for i in range(divisions + 1):
            t = i / divisions
            assert np.all(np.isfinite(path.position_at(t)))
            assert np.linalg.norm(path.tangent_at(t)) == pytest.approx(1.0)
    
    def test_equal_steps_cover_equal_distance(self):
        """Test consecutive samples are evenly spaced along the path."""
        segments = compose_segments(["leftTurn", "leftUTurn", "straight"], UNSCALED)
        path = CompositePath([s.curve for s in segments])
        
        ts = np.linspace(0.0, 1.0, 61)
        points = np.array([path.position_at(t) for t in ts])
        chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
        
        assert chords == pytest.approx(np.full_like(chords, path.global_length() / 60), rel=0.02)
