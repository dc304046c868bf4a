"""Observability – structured logging for the scheduling core."""
