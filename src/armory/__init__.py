"""Armory: query API and reload pipeline for mod configuration items."""

__version__ = "0.1.0"
