"""Kernel – errors, time primitives and value types shared by every layer."""
