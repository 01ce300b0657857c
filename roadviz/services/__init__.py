"""Services - congestion classification and network rendering."""

from .congestion import CongestionClassifier
from .renderer import RENDER_ATTRIBUTES, NetworkRenderer

__all__ = ["CongestionClassifier", "NetworkRenderer", "RENDER_ATTRIBUTES"]
