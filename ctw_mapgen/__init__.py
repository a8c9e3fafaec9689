"""
Procedural layout generator for symmetric Capture the Wool maps.
"""

__version__ = "0.1.0"
