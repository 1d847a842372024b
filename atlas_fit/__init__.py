"""Atlas Fit: driver-load fit scoring for dispatch."""

__version__ = "0.1.0"
