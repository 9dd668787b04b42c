"""Benchmarking subsystem for simdbench.

Loads two builds of a decompression module (baseline and SIMD),
times repeated calls into each, reduces the samples to summary
statistics and compares the two summaries.
"""
