"""Presentation layer for the onboarding bounded context."""
