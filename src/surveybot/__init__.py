"""Surveybot: anonymous 1-4 rating surveys with aggregated statistics."""

__version__ = "0.1.0"
