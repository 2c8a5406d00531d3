"""
Track generator - Procedural assembly of prefab pieces into a track.

Generates:
- Random piece sequences drawn from the prefab catalog
- World-space segments stitched with positional and tangent continuity
- Random elevation profiles across the segment boundaries
"""

from dataclasses import dataclass
import logging
from numbers import Integral
from typing import List, Sequence, Tuple

import numpy as np

from ribbontrack.track.bezier import CubicBezier
from ribbontrack.track.elevation import draw_heights
from ribbontrack.track.prefabs import DEFAULT_CATALOG, PrefabCatalog, SegmentPrefab
from ribbontrack.track.segment import BankNormal, PlacedSegment
from ribbontrack.utils.exceptions import DegenerateParameterError
from ribbontrack.utils.vectors import FORWARD, UP, rotate_about_axis, signed_yaw

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationParameters:
    """Configuration for procedural track generation."""
    # Piece generation
    piece_count: int = 12
    
    # Per-piece uniform scale
    min_scale: float = 0.5
    max_scale: float = 1.5
    
    # Per-piece elevation change (negative = descent)
    min_delta: float = -1.0
    max_delta: float = 0.0
    
    # Spline calculation
    tension: float = 0.5
    divisions_per_curve: int = 24
    
    # Ribbon half-width
    width: float = 0.1
    
    def validate(self) -> None:
        """Validate parameter ranges.
        
        Raises:
            DegenerateParameterError: If any value cannot produce a track.
        """
        values = (
            self.min_scale, self.max_scale, self.min_delta,
            self.max_delta, self.tension, self.width,
        )
        if not all(np.isfinite(v) for v in values):
            raise DegenerateParameterError("Generation parameters must be finite")
        for name in ("piece_count", "divisions_per_curve"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise DegenerateParameterError(f"{name} must be an integer, got {value!r}")
        if self.piece_count < 1:
            raise DegenerateParameterError("piece_count must be at least 1")
        if self.min_scale <= 0.0:
            raise DegenerateParameterError("min_scale must be positive")
        if self.min_scale > self.max_scale:
            raise DegenerateParameterError("min_scale must not exceed max_scale")
        if self.min_delta > self.max_delta:
            raise DegenerateParameterError("min_delta must not exceed max_delta")
        if self.divisions_per_curve < 1:
            raise DegenerateParameterError("divisions_per_curve must be at least 1")
        if self.width <= 0.0:
            raise DegenerateParameterError("width must be positive")


def generate_pieces(
    params: GenerationParameters,
    rng: np.random.Generator,
    catalog: PrefabCatalog = DEFAULT_CATALOG,
) -> List[str]:
    """Draw a random sequence of piece names from the catalog.
    
    Args:
        params: Generation parameters (uses ``piece_count``)
        rng: Random source
        catalog: Prefab catalog to draw from
        
    Returns:
        List of ``piece_count`` catalog names
    """
    params.validate()
    names = catalog.names
    if not names:
        raise DegenerateParameterError("Prefab catalog is empty")
    indices = rng.integers(0, len(names), size=params.piece_count)
    return [names[i] for i in indices]


def _place_prefab(
    prefab: SegmentPrefab,
    scale: float,
    enter_point: np.ndarray,
    enter_heading: np.ndarray,
) -> PlacedSegment:
    """Instantiate one prefab at the given entry point and heading."""
    yaw = signed_yaw(enter_heading, FORWARD)
    
    points = rotate_about_axis(prefab.control_points * scale, UP, yaw) + enter_point
    curve = CubicBezier(points)
    
    normals = [
        BankNormal(k.t, rotate_about_axis(UP, curve.tangent_at(k.t), k.angle))
        for k in prefab.bank_keyframes
    ]
    if not prefab.has_end_keyframe:
        # Unbanked "up" at the exit so banking is defined up to the boundary
        normals.append(BankNormal(1.0, rotate_about_axis(UP, curve.tangent_at(1.0), 0.0)))
    
    return PlacedSegment(
        name=prefab.name,
        curve=curve,
        normals=tuple(normals),
        scale=float(scale),
    )


def compose_segments(
    piece_names: Sequence[str],
    params: GenerationParameters | None = None,
    rng: np.random.Generator | None = None,
    catalog: PrefabCatalog = DEFAULT_CATALOG,
) -> List[PlacedSegment]:
    """Place a sequence of prefabs end to end in world space.
    
    Each piece is scaled, yawed to match the exit heading of the previous
    piece, and translated to its exit point. The result is positionally
    and tangentially continuous at every join. Heights are left at 0;
    see ``generate_heights``.
    
    Args:
        piece_names: Ordered catalog names
        params: Generation parameters (uses the scale range)
        rng: Random source for the scale draws
        catalog: Prefab catalog
        
    Returns:
        List of placed segments, one per piece
        
    Raises:
        UnknownPrefabError: If any name is missing from the catalog.
        DegenerateParameterError: If there are no pieces or the
            parameters are invalid.
    """
    params = params or GenerationParameters()
    params.validate()
    if not piece_names:
        raise DegenerateParameterError("At least one piece is required")
    
    # Unknown names abort before any segment is placed
    prefabs = [catalog.lookup(name) for name in piece_names]
    rng = rng if rng is not None else np.random.default_rng()
    
    enter_point = np.zeros(3)
    enter_heading = FORWARD.copy()
    segments = []
    
    for prefab in prefabs:
        scale = rng.uniform(params.min_scale, params.max_scale)
        segment = _place_prefab(prefab, scale, enter_point, enter_heading)
        segments.append(segment)
        
        enter_heading = segment.exit_heading
        enter_point = segment.end
    
    logger.debug("Composed %d segments from pieces %s", len(segments), list(piece_names))
    return segments


def generate_heights(
    segments: Sequence[PlacedSegment],
    params: GenerationParameters,
    rng: np.random.Generator,
) -> List[PlacedSegment]:
    """Assign a fresh random elevation profile to the segments.
    
    Planar geometry is shared with the input; only the heights change.
    
    Args:
        segments: Composed segments
        params: Generation parameters (uses the delta range)
        rng: Random source
        
    Returns:
        New segments with ``enter_height``/``exit_height`` filled in
    """
    params.validate()
    heights = draw_heights(len(segments), params.min_delta, params.max_delta, rng)
    
    logger.debug("Generated heights %s", np.round(heights, 3).tolist())
    return [
        segment.with_heights(heights[i], heights[i + 1])
        for i, segment in enumerate(segments)
    ]


class TrackGenerator:
    """Procedural track generator.
    
    Holds the generation parameters and a seeded random source, and runs
    the full pipeline: pieces -> composed segments -> heights.
    
    Usage:
        generator = TrackGenerator(GenerationParameters(piece_count=8), seed=7)
        pieces, segments = generator.generate()
    """
    
    def __init__(
        self,
        params: GenerationParameters | None = None,
        seed: int | None = None,
        catalog: PrefabCatalog = DEFAULT_CATALOG,
    ):
        """Initialize generator.
        
        Args:
            params: Generation parameters. Uses defaults if None.
            seed: Random seed (None for nondeterministic)
            catalog: Prefab catalog to draw pieces from
        """
        self.params = params or GenerationParameters()
        self.params.validate()
        self.catalog = catalog
        self._rng = np.random.default_rng(seed)
    
    def generate_pieces(self) -> List[str]:
        return generate_pieces(self.params, self._rng, self.catalog)
    
    def compose(self, piece_names: Sequence[str]) -> List[PlacedSegment]:
        """Compose and assign heights for an explicit piece list."""
        segments = compose_segments(piece_names, self.params, self._rng, self.catalog)
        return generate_heights(segments, self.params, self._rng)
    
    def regenerate_heights(self, segments: Sequence[PlacedSegment]) -> List[PlacedSegment]:
        return generate_heights(segments, self.params, self._rng)
    
    def generate(self) -> Tuple[List[str], List[PlacedSegment]]:
        """Generate a new random piece list and its segments.
        
        Returns:
            Tuple of (piece names, placed segments)
        """
        pieces = self.generate_pieces()
        return pieces, self.compose(pieces)
    
    def generate_with_seed(self, seed: int) -> Tuple[List[str], List[PlacedSegment]]:
        """Generate with a specific seed.
        
        Args:
            seed: Random seed
            
        Returns:
            Tuple of (piece names, placed segments)
        """
        self._rng = np.random.default_rng(seed)
        return self.generate()
