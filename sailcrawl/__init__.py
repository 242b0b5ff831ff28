"""Sailboat listing crawler."""
