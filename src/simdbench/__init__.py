"""simdbench: compare baseline and SIMD builds of a decompression module."""

__version__ = "0.1.0"
