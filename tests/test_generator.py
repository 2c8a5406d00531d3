"""Tests for piece composition and height generation."""

import pytest
import numpy as np

from ribbontrack.track.generator import (
    GenerationParameters,
    TrackGenerator,
    compose_segments,
    generate_heights,
    generate_pieces,
)
from ribbontrack.track.prefabs import DEFAULT_CATALOG
from ribbontrack.utils.exceptions import DegenerateParameterError, UnknownPrefabError
from ribbontrack.utils.vectors import UP

UNSCALED = GenerationParameters(min_scale=1.0, max_scale=1.0)


class TestGenerationParameters:
    """Test parameter validation."""
    
    def test_defaults_are_valid(self):
        """Test default parameters pass validation."""
        GenerationParameters().validate()
    
    @pytest.mark.parametrize(
        "changes",
        [
            {"piece_count": 0},
            {"min_scale": 2.0, "max_scale": 1.0},
            {"min_scale": 0.0},
            {"min_delta": 1.0, "max_delta": -1.0},
            {"divisions_per_curve": 0},
            {"width": 0.0},
            {"tension": float("nan")},
            {"piece_count": 2.5},
            {"divisions_per_curve": float("inf")},
            {"divisions_per_curve": 12.0},
        ],
    )
    def test_degenerate_parameters(self, changes):
        """Test invalid ranges are rejected."""
        with pytest.raises(DegenerateParameterError):
            GenerationParameters(**changes).validate()


class TestComposeSegments:
    """Test placing prefabs in world space."""
    
    def test_single_piece(self):
        """Test one left turn starts at the origin and ends at (-1, 0, -1)."""
        segments = compose_segments(["leftTurn"], UNSCALED)
        
        assert len(segments) == 1
        curve = segments[0].curve
        assert np.allclose(curve.point_at(0.0), [0.0, 0.0, 0.0])
        assert np.allclose(curve.point_at(1.0), [-1.0, 0.0, -1.0])
        assert segments[0].enter_height == 0.0
    
    def test_rotates_and_places_pieces_relative_to_entry(self):
        """Test pieces chain from each previous exit point and heading."""
        segments = compose_segments(
            ["leftTurn", "leftTurn", "rightTurn", "leftUTurn"], UNSCALED
        )
        
        expected = [
            (0.0, 0.0, 0.0),
            (-1.0, 0.0, -1.0),
            (-2.0, 0.0, 0.0),
            (-3.0, 0.0, 1.0),
            (-3.0, 0.0, 3.0),
        ]
        assert len(segments) == 4
        for i, segment in enumerate(segments):
            assert np.allclose(segment.curve.point_at(0.0), expected[i])
            assert np.allclose(segment.curve.point_at(1.0), expected[i + 1])
    
    def test_joins_are_exact(self):
        """Test each segment starts exactly where the previous one ends."""
        rng = np.random.default_rng(3)
        pieces = generate_pieces(GenerationParameters(piece_count=10), rng)
        segments = compose_segments(pieces, GenerationParameters(), rng)
        
        for prev, cur in zip(segments, segments[1:]):
            assert np.array_equal(prev.end, cur.start)
    
    def test_joins_are_tangent_continuous(self):
        """Test the exit tangent of each segment matches the next entry tangent."""
        rng = np.random.default_rng(11)
        pieces = ["leftTurn", "straight", "rightUTurn", "rightTurn", "leftUTurn", "straight"]
        segments = compose_segments(pieces, GenerationParameters(), rng)
        
        for prev, cur in zip(segments, segments[1:]):
            assert np.allclose(prev.curve.tangent_at(1.0), cur.curve.tangent_at(0.0), atol=1e-3)
    
    def test_next_piece_enters_along_exit_heading(self):
        """Test each piece is yawed onto the previous piece's exit heading."""
        segments = compose_segments(["rightUTurn", "leftTurn", "straight"], GenerationParameters())
        
        for prev, cur in zip(segments, segments[1:]):
            assert np.linalg.norm(prev.exit_heading) == pytest.approx(1.0)
            assert np.array_equal(cur.start, prev.end)
            assert np.allclose(cur.curve.tangent_at(0.0), prev.exit_heading, atol=1e-3)
    
    def test_scale_is_drawn_from_range(self):
        """Test per-piece scales respect the configured range."""
        params = GenerationParameters(min_scale=0.5, max_scale=1.5)
        segments = compose_segments(["straight"] * 20, params, np.random.default_rng(5))
        
        scales = [s.scale for s in segments]
        assert min(scales) >= 0.5
        assert max(scales) <= 1.5
        for segment in segments:
            assert segment.length == pytest.approx(segment.scale, rel=1e-6)
    
    def test_trailing_keyframe_is_appended(self):
        """Test a prefab without a t = 1 keyframe gets an unbanked one."""
        segments = compose_segments(["leftTurn", "straight"], UNSCALED)
        
        for segment in segments:
            last = segment.normals[-1]
            assert last.t == 1.0
            assert np.allclose(last.normal, UP)
        assert len(segments[0].normals) == len(DEFAULT_CATALOG["leftTurn"].bank_keyframes) + 1
    
    def test_banked_normal_rotates_about_tangent(self):
        """Test banked normals stay perpendicular to the local tangent."""
        segment = compose_segments(["leftTurn"], UNSCALED)[0]
        
        for bank in segment.normals:
            tangent = segment.curve.tangent_at(bank.t)
            assert np.linalg.norm(bank.normal) == pytest.approx(1.0)
            assert np.dot(bank.normal, tangent) == pytest.approx(0.0, abs=1e-9)
        
        # Bank angle of -40 degrees at t = 0.4
        assert np.dot(segment.normals[1].normal, UP) == pytest.approx(np.cos(np.radians(40.0)))
    
    def test_unknown_piece_aborts(self):
        """Test an unknown piece name aborts composition."""
        with pytest.raises(UnknownPrefabError):
            compose_segments(["leftTurn", "corkscrew"], UNSCALED)
    
    def test_empty_piece_list(self):
        """Test composing nothing is rejected."""
        with pytest.raises(DegenerateParameterError):
            compose_segments([], UNSCALED)


class TestGenerateHeights:
    """Test elevation assignment."""
    
    def test_first_height_is_ground(self):
        """Test the track always starts at height 0."""
        segments = compose_segments(["leftTurn", "rightTurn", "straight"], UNSCALED)
        params = GenerationParameters(min_delta=2.0, max_delta=5.0)
        
        with_heights = generate_heights(segments, params, np.random.default_rng(0))
        
        assert with_heights[0].enter_height == 0.0
    
    def test_heights_chain_between_segments(self):
        """Test each exit height is the next entry height."""
        segments = compose_segments(["straight"] * 5, UNSCALED)
        params = GenerationParameters(min_delta=-2.0, max_delta=2.0)
        
        with_heights = generate_heights(segments, params, np.random.default_rng(1))
        
        for prev, cur in zip(with_heights, with_heights[1:]):
            assert prev.exit_height == cur.enter_height
        for segment in with_heights:
            assert -2.0 <= segment.elevation_change <= 2.0
    
    def test_planar_geometry_is_shared(self):
        """Test height generation does not touch the curves."""
        segments = compose_segments(["leftTurn", "straight"], UNSCALED)
        
        with_heights = generate_heights(segments, GenerationParameters(), np.random.default_rng(2))
        
        for before, after in zip(segments, with_heights):
            assert after.curve is before.curve
            assert before.enter_height == 0.0


class TestTrackGenerator:
    """Test the generator pipeline."""
    
    def test_generator_creates_segments(self):
        """Test generator produces the configured number of pieces."""
        generator = TrackGenerator(GenerationParameters(piece_count=7), seed=1)
        pieces, segments = generator.generate()
        
        assert len(pieces) == 7
        assert len(segments) == 7
        assert all(name in DEFAULT_CATALOG for name in pieces)
    
    def test_generator_with_seed(self):
        """Test seeded generation is reproducible."""
        generator = TrackGenerator()
        
        pieces1, segments1 = generator.generate_with_seed(42)
        pieces2, segments2 = generator.generate_with_seed(42)
        
        assert pieces1 == pieces2
        for a, b in zip(segments1, segments2):
            assert np.array_equal(a.curve.control_points, b.curve.control_points)
            assert a.exit_height == b.exit_height
    
    def test_invalid_parameters_rejected_up_front(self):
        """Test the generator validates before drawing anything."""
        with pytest.raises(DegenerateParameterError):
            TrackGenerator(GenerationParameters(min_scale=3.0, max_scale=1.0))
