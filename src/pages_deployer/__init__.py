"""Publish a build output folder to a dedicated branch of a git repository."""

__version__ = "0.1.0"
