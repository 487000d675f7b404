"""Utility functions for checked-download."""

# ruff: noqa: F401
from .checksums import calculate_digest
from .config import read_config
