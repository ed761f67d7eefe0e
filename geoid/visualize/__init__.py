"""
geoid.visualize

Diagnostic plots of potential profiles and solved surfaces.
"""

from .profile import ProfilePlotter

__all__ = ["ProfilePlotter"]
