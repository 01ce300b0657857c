"""Top-level package for roadviz.

roadviz imports road networks from CSV tables and draws them, together
with travel demand, boundaries and congestion patterns from a traffic
assignment, into PDF, PNG, SVG or interactive HTML graphics.
"""

from .pipeline import RenderRequest, draw_network

__all__ = ["RenderRequest", "draw_network"]
