#!/usr/bin/env python3
"""
Track Generation Example

This example demonstrates how to:
1. Generate tracks with different configurations
2. Use seeds for reproducible tracks
3. Inspect track segments, banking and elevation
4. Build a ribbon mesh and regenerate parts of a track

Run with: python generate_tracks.py
"""

import logging
import math

from ribbontrack.track import (
    GenerationParameters,
    Track,
    TrackController,
    TrackGenerator,
    build_ribbon_mesh,
)
from ribbontrack.utils import configure_logging


def generate_default_track():
    """Generate a track with default settings."""
    print("=" * 60)
    print("1. Default Track Generation")
    print("=" * 60)
    
    generator = TrackGenerator(seed=2024)
    pieces, segments = generator.generate()
    track = Track(segments)
    
    print(f"\nPieces: {', '.join(pieces)}")
    print(f"Length: {track.length:.2f}")
    print(f"Segments: {track.num_segments}")
    print(f"Bank keyframes: {len(track.keyframes)}")
    
    return track


def generate_seeded_tracks():
    """Generate reproducible tracks using seeds."""
    print("\n" + "=" * 60)
    print("2. Seeded Track Generation (Reproducible)")
    print("=" * 60)
    
    generator = TrackGenerator()
    
    pieces1, _ = generator.generate_with_seed(12345)
    pieces2, _ = generator.generate_with_seed(12345)
    
    print(f"\nTrack A pieces: {pieces1}")
    print(f"Track B pieces: {pieces2}")
    print(f"Same layout: {pieces1 == pieces2}")


def generate_hilly_track():
    """Generate a short track with large elevation changes."""
    print("\n" + "=" * 60)
    print("3. Hilly Track")
    print("=" * 60)
    
    params = GenerationParameters(
        piece_count=6,
        min_delta=-2.0,
        max_delta=2.0,
        tension=0.8,
    )
    generator = TrackGenerator(params, seed=7)
    _, segments = generator.generate()
    track = Track(segments, tension=params.tension)
    
    print("\nHeight profile:")
    for t in (0.0, 0.25, 0.5, 0.75, 1.0):
        print(f"  t={t:.2f}  height={track.height_at(t):+.3f}")


def inspect_track(track: Track):
    """Inspect individual segments and banking."""
    print("\n" + "=" * 60)
    print("4. Track Inspection")
    print("=" * 60)
    
    for segment in track.segments:
        x, _, z = segment.end
        print(
            f"{segment.name:>10}  scale={segment.scale:.2f}  "
            f"length={segment.length:.2f}  end=({x:+.2f}, {z:+.2f})"
        )
    
    # Steepest bank along the sampled track
    steepest = max(
        math.degrees(math.acos(min(1.0, track.normal_at(t)[1])))
        for t in track.sample_parameters()
    )
    print(f"\nSteepest bank: {steepest:.1f}°")


def build_mesh(track: Track):
    """Build the ribbon mesh for a renderer."""
    print("\n" + "=" * 60)
    print("5. Ribbon Mesh")
    print("=" * 60)
    
    mesh = build_ribbon_mesh(track, width=0.1)
    
    print(f"\nVertices: {mesh.vertices.shape[0]}")
    print(f"Triangles: {mesh.num_triangles}")
    print(f"Wireframe edges: {len(mesh.wireframe_edges())}")


def regenerate_with_controller():
    """Drive regeneration the way an interactive UI would."""
    print("\n" + "=" * 60)
    print("6. Controller Regeneration")
    print("=" * 60)
    
    controller = TrackController(GenerationParameters(piece_count=8), seed=99)
    print(f"\nInitial length: {controller.track.length:.2f}")
    
    controller.regenerate_heights()
    print(f"New end height: {controller.track.height_at(1.0):+.3f}")
    
    controller.update_parameters(divisions_per_curve=6)
    snapshot = controller.recalculate_spline()
    print(f"Triangles after resampling: {snapshot.mesh.num_triangles}")


def main():
    configure_logging(logging.INFO)
    
    default_track = generate_default_track()
    generate_seeded_tracks()
    generate_hilly_track()
    inspect_track(default_track)
    build_mesh(default_track)
    regenerate_with_controller()
    
    print("\n" + "=" * 60)
    print("Track generation examples complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
