"""Utility helpers for ftml."""
