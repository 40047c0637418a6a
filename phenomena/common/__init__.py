"""Shared helpers used across the board and API layers."""
