"""Snapshot persistence and content reading.

This package writes per-category JSON snapshots, serves fallback data,
and resolves snapshot records for presentation.
"""
