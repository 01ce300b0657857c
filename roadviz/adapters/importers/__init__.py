"""Importer adapters - Implementations of GraphImporterPort.

Available implementations:
- CsvGraphImporter: Reads vertex and edge CSV tables
"""

from .csv_importer import CsvGraphImporter

__all__ = ["CsvGraphImporter"]
