"""HTTP API for contract search."""
