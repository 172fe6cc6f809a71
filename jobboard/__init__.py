"""Async client for the job board REST API."""

__version__ = "1.0.0"
