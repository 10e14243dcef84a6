"""
NeoMatrix Frame Creator - editor core for LED matrix pixel-art animations
"""

__version__ = "1.0.0"
