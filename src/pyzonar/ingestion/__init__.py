"""Ingestion layer.

This package turns raw Zonar feed text into normalized snapshots of
asset records.
"""

__all__: list[str] = []
