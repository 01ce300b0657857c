"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Graph import formats (CSV tables)
- Input readers (flow patterns, travel demand, OSM POLY boundaries)
- Graphic backends (matplotlib, Folium)
"""
