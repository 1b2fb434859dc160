"""Inbound (CLI, API) and outbound (model, index) adapters."""
