"""Integrations with external key managers."""
