"""Typed working-copy state from Subversion command output."""

__version__ = "0.1.0"
