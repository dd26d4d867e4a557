"""Vacation request validation and quota accounting for ShiftGo."""

__version__ = "0.1.0"
