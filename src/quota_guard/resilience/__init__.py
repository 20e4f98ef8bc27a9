"""Resilience – bounded store calls."""
