"""Utility helpers for liftmates."""
