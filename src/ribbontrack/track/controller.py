"""
Track controller - Regeneration and publication of track snapshots.

Every regeneration builds a complete new snapshot before publishing it,
so readers never observe a partially rebuilt track. A failed rebuild
leaves the previous snapshot in place.
"""

from dataclasses import dataclass, replace
import logging
from typing import Sequence, Tuple

from ribbontrack.track.generator import GenerationParameters, TrackGenerator
from ribbontrack.track.mesh import RibbonMesh, build_ribbon_mesh
from ribbontrack.track.prefabs import DEFAULT_CATALOG, PrefabCatalog
from ribbontrack.track.segment import PlacedSegment
from ribbontrack.track.track import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TrackSnapshot:
    """Fully built, immutable generation result."""
    pieces: Tuple[str, ...]
    segments: Tuple[PlacedSegment, ...]
    track: Track
    mesh: RibbonMesh
    params: GenerationParameters


class TrackController:
    """Owns the current track and rebuilds it on parameter changes.
    
    Rebuild entry points:
    - ``regenerate_pieces``: new random piece list, scales and heights
    - ``set_pieces``: explicit piece list, new scales and heights
    - ``regenerate_spline``: same pieces, new scales and heights
    - ``regenerate_heights``: same planar geometry, new heights
    - ``recalculate_spline``: same segments, re-fit with current settings
    
    Usage:
        controller = TrackController(seed=42)
        mesh = controller.snapshot.mesh
        controller.update_parameters(tension=0.8)
        controller.recalculate_spline()
    """
    
    def __init__(
        self,
        params: GenerationParameters | None = None,
        seed: int | None = None,
        catalog: PrefabCatalog = DEFAULT_CATALOG,
    ):
        """Initialize controller and publish a first random track.
        
        Args:
            params: Generation parameters. Uses defaults if None.
            seed: Random seed (None for nondeterministic)
            catalog: Prefab catalog
        """
        self._generator = TrackGenerator(params, seed=seed, catalog=catalog)
        self._snapshot: TrackSnapshot | None = None
        self.regenerate_pieces()
    
    @property
    def params(self) -> GenerationParameters:
        return self._generator.params
    
    @property
    def snapshot(self) -> TrackSnapshot:
        """The currently published snapshot."""
        if self._snapshot is None:
            raise RuntimeError("No track has been published")
        return self._snapshot
    
    @property
    def track(self) -> Track:
        return self.snapshot.track
    
    def update_parameters(self, **changes) -> GenerationParameters:
        """Replace generation parameters.
        
        Does not rebuild; call one of the regeneration methods afterwards.
        
        Raises:
            DegenerateParameterError: If the new parameters are invalid
                (the previous parameters are kept).
        """
        params = replace(self._generator.params, **changes)
        params.validate()
        self._generator.params = params
        return params
    
    def _publish(self, pieces: Sequence[str], segments: Sequence[PlacedSegment]) -> TrackSnapshot:
        params = self._generator.params
        track = Track(
            segments,
            tension=params.tension,
            divisions_per_curve=params.divisions_per_curve,
        )
        mesh = build_ribbon_mesh(track, width=params.width)
        
        snapshot = TrackSnapshot(
            pieces=tuple(pieces),
            segments=tuple(segments),
            track=track,
            mesh=mesh,
            params=params,
        )
        self._snapshot = snapshot
        logger.debug(
            "Published track: %d segments, length %.3f, %d triangles",
            track.num_segments, track.length, mesh.num_triangles,
        )
        return snapshot
    
    def regenerate_pieces(self) -> TrackSnapshot:
        """Draw a new piece list and rebuild everything."""
        pieces = self._generator.generate_pieces()
        logger.debug("Regenerating pieces: %s", pieces)
        return self.set_pieces(pieces)
    
    def set_pieces(self, pieces: Sequence[str]) -> TrackSnapshot:
        """Rebuild from an explicit piece list.
        
        Raises:
            UnknownPrefabError: If a piece is not in the catalog.
        """
        segments = self._generator.compose(pieces)
        return self._publish(pieces, segments)
    
    def regenerate_spline(self) -> TrackSnapshot:
        """Redraw piece scales and heights for the current pieces."""
        return self.set_pieces(self.snapshot.pieces)
    
    def regenerate_heights(self) -> TrackSnapshot:
        """Redraw heights only; planar geometry is kept."""
        snapshot = self.snapshot
        segments = self._generator.regenerate_heights(snapshot.segments)
        return self._publish(snapshot.pieces, segments)
    
    def recalculate_spline(self) -> TrackSnapshot:
        """Re-fit the current segments with the current tension, divisions and width."""
        snapshot = self.snapshot
        return self._publish(snapshot.pieces, snapshot.segments)
