"""
RibbonTrack - Procedural banked ribbon tracks from curved prefab pieces.

This package provides:
- A catalog of reusable cubic Bezier track pieces with banking keyframes
- Continuous (C1) assembly of pieces into one arc-length parametrized path
- Interpolated banking normals and a smooth random elevation profile
- Ribbon mesh generation for external renderers
"""

__version__ = "0.1.0"

from ribbontrack.track.generator import GenerationParameters, TrackGenerator
from ribbontrack.track.track import Track
from ribbontrack.track.mesh import build_ribbon_mesh
from ribbontrack.track.controller import TrackController

__all__ = [
    "GenerationParameters",
    "TrackGenerator",
    "Track",
    "build_ribbon_mesh",
    "TrackController",
    "__version__",
]
