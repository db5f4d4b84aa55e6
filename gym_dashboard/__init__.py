"""Gym management terminal dashboard."""
