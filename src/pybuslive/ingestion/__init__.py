"""Ingestion layer.

This package contains adapters that fetch data from the bus backend and
turn raw payloads into validated domain models.
"""

__all__: list[str] = []
