"""Command line interface.

Invoked via the ``smoogle`` console script or ``python -m smoogle``.
"""
