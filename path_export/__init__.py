"""
Robot path export.

Encodes editor paths (lines and cubic curves with per-point speeds) into
the line-oriented ``path.jerryio v0.1`` text format with an embedded JSON
metadata trailer.
"""

__version__ = "0.1.0"
