"""Storage layer.

This package persists date partitions, raw export archives, and
derived outputs. It also hosts the SDK client that drives a full run.
"""
