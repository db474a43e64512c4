"""Procedural territory map generation on a discrete grid."""

__version__ = "0.1.0"
