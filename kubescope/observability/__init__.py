"""Logging and metrics for kubescope."""
