"""Errors raised while reading hokhub settings."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A setting is present but unusable, such as a malformed flag or webhook URL."""
