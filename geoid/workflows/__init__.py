"""
geoid.workflows

High-level workflows that chain the core, dynamics and measure modules.
"""

from .analysis import SurfaceAnalysis, bracket_validity, run_surface_analysis

__all__ = ["run_surface_analysis", "bracket_validity", "SurfaceAnalysis"]
