"""Core domain, ports and services (no third-party I/O)."""
