"""
Core domain layer for name-resolution.

This package contains pure business logic with no I/O.
All code here should be testable without configuration files or logging.
"""

from __future__ import annotations

__all__ = []
