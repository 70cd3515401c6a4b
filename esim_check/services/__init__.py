"""Throttle gate, verdict cache and SIM spec extraction."""
