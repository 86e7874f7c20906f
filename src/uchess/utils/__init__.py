"""Shared utilities for uchess."""

from uchess.utils.logging import setup_logging

__all__ = ["setup_logging"]
