"""Application layer – the scheduling engine."""
