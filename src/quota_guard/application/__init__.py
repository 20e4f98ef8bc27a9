"""Application layer – store port, quota engine, abuse heuristic, service."""
