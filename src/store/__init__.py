"""Registry storage layer.

This module owns the volume map, its state file and startup loading.
It powers every lifecycle operation exposed to plugin hosts and the CLI.
"""
