"""
Ribbon mesh - Triangle strip swept along the track.

Two triangles per sampling step, like this:
 ____
 | /|
 |/_|

The cross-section at each sample is oriented by the banking normal, so
the ribbon twists through banked turns.
"""

from dataclasses import dataclass

import numpy as np

from ribbontrack.track.track import Track
from ribbontrack.utils.exceptions import DegenerateParameterError
from ribbontrack.utils.vectors import normalize

DEFAULT_WIDTH = 0.1


@dataclass(frozen=True, eq=False)
class RibbonMesh:
    """Unindexed triangle soup for an external renderer.
    
    Attributes:
        vertices: (6 * steps, 3) vertex positions
        faces: (2 * steps, 3) vertex indices per triangle
    """
    vertices: np.ndarray
    faces: np.ndarray
    
    @property
    def num_triangles(self) -> int:
        return int(self.faces.shape[0])
    
    def face_normals(self) -> np.ndarray:
        """Unnormalized face normals ``(b - a) x (c - a)`` per triangle."""
        tri = self.vertices[self.faces]
        return np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    
    def wireframe_edges(self) -> np.ndarray:
        """Unique undirected triangle edges.
        
        Returns:
            (n, 2) array of vertex index pairs
        """
        faces = self.faces
        edges = np.concatenate([faces[:, [0, 1]], faces[:, [1, 2]], faces[:, [2, 0]]])
        edges = np.sort(edges, axis=1)
        return np.unique(edges, axis=0)


def build_ribbon_mesh(
    track: Track,
    width: float = DEFAULT_WIDTH,
    divisions: int | None = None,
) -> RibbonMesh:
    """Sweep a flat ribbon along the track.
    
    Args:
        track: Track to sample
        width: Lateral offset from the centerline to each edge
        divisions: Number of steps (defaults to ``track.divisions``)
        
    Returns:
        Ribbon mesh with two triangles per step
    """
    if divisions is None:
        divisions = track.divisions
    if divisions < 1:
        raise DegenerateParameterError("divisions must be at least 1")
    if width <= 0.0:
        raise DegenerateParameterError("width must be positive")
    
    ts = np.arange(divisions + 1, dtype=np.float64) / divisions
    ts[-1] = 1.0
    
    positions = np.array([track.position_at(t) for t in ts])
    # Normal is not re-orthogonalized against the tangent
    offsets = np.array([
        normalize(np.cross(track.tangent_at(t), track.normal_at(t))) * width
        for t in ts
    ])
    
    cur, nxt = positions[:-1], positions[1:]
    cur_off, nxt_off = offsets[:-1], offsets[1:]
    
    vertices = np.stack(
        [
            # triangle one
            cur + cur_off,
            nxt + nxt_off,
            cur - cur_off,
            # triangle two
            cur - cur_off,
            nxt + nxt_off,
            nxt - nxt_off,
        ],
        axis=1,
    ).reshape(-1, 3)
    
    faces = np.arange(vertices.shape[0], dtype=np.int64).reshape(-1, 3)
    return RibbonMesh(vertices=vertices, faces=faces)
