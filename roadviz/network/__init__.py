"""The in-memory road network, its construction and filtering."""

from .builder import build_network, load_network
from .filtering import KNOWN_FIXUPS, NetworkFixup, apply_fixup, get_fixup, largest_scc_mask
from .graph import RoadNetwork

__all__ = [
    "RoadNetwork",
    "build_network",
    "load_network",
    "NetworkFixup",
    "KNOWN_FIXUPS",
    "apply_fixup",
    "get_fixup",
    "largest_scc_mask",
]
