"""Ingestion layer.

This package contains the refresh scheduler that fetches artifact data and
the normalization that turns raw intel payloads into domain objects.
"""

__all__: list[str] = []
