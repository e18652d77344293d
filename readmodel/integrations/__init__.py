"""Integrations with external document stores."""
