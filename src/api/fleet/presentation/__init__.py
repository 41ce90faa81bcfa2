"""Presentation layer for the fleet bounded context."""
