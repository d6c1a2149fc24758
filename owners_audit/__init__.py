"""Audit OWNERS files for users outside the GitHub organization."""

__version__ = "0.1.0"
