"""Observability – structured logging helpers."""
from mp_jobs.observability.logging.factory import JsonLoggerFactory, configure_logging, resolve_level
from mp_jobs.observability.logging.processors import ScheduleValueProcessor, get_logger

__all__ = ["JsonLoggerFactory", "ScheduleValueProcessor", "configure_logging", "get_logger", "resolve_level"]
