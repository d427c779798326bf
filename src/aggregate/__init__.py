"""Rollup aggregation layer.

This package re-derives item, day, and global summaries from the full
partition store on every run. Nothing is updated incrementally.
"""
