"""Adapters – store backends, HTTP surface, extension-side client."""
