"""Phenomena: a REST backend for an anonymous incident-reporting board."""

from __future__ import annotations

__version__ = "0.1.0"
