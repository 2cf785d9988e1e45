"""Biological age workflow client package."""
