"""Readings imported from outside the diary."""

from .health_data import HealthDataSource

__all__ = ["HealthDataSource"]
