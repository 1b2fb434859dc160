"""Smoogle: semantic search over a catalog of smart contracts."""

__version__ = "0.1.0"
