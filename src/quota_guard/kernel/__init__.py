"""Kernel – errors, time and lock primitives shared by every layer."""
