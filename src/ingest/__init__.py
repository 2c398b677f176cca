"""Spreadsheet synchronization.

This package talks to the remote spreadsheet and drives the
fetch and populate workflows.
"""
