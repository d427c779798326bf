"""Trade-log ingestion pipeline.

This package reads raw exports, selects trades not seen before, and
appends them to date partitions alongside the identity index.
"""
