"""
Track module - Procedural assembly of banked, elevated ribbon tracks.

This module contains:
- SegmentPrefab / PrefabCatalog: Named local-space curve templates
- TrackGenerator: Piece selection, composition and height generation
- PlacedSegment: A prefab instantiated in world space
- Track: Position / tangent / normal queries along the whole track
- RibbonMesh: Triangle strip swept along the track
- TrackController: Snapshot-based regeneration
"""

from ribbontrack.track.prefabs import (
    DEFAULT_CATALOG,
    BankKeyframe,
    PrefabCatalog,
    SegmentPrefab,
    lookup,
    mirror,
)
from ribbontrack.track.segment import BankNormal, PlacedSegment
from ribbontrack.track.generator import (
    GenerationParameters,
    TrackGenerator,
    compose_segments,
    generate_heights,
    generate_pieces,
)
from ribbontrack.track.path import CompositePath
from ribbontrack.track.banking import BankingField
from ribbontrack.track.elevation import ElevationProfile
from ribbontrack.track.track import Track
from ribbontrack.track.mesh import RibbonMesh, build_ribbon_mesh
from ribbontrack.track.controller import TrackController, TrackSnapshot

__all__ = [
    "DEFAULT_CATALOG",
    "BankKeyframe",
    "PrefabCatalog",
    "SegmentPrefab",
    "lookup",
    "mirror",
    "BankNormal",
    "PlacedSegment",
    "GenerationParameters",
    "TrackGenerator",
    "compose_segments",
    "generate_heights",
    "generate_pieces",
    "CompositePath",
    "BankingField",
    "ElevationProfile",
    "Track",
    "RibbonMesh",
    "build_ribbon_mesh",
    "TrackController",
    "TrackSnapshot",
]
