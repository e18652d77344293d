"""Handlers for the catalogue."""
