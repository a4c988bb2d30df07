"""File-format detection and browser models for an editor of Marathon shapes, sounds and physics files."""

__version__ = "0.7.0"