"""Host request contract.

This module maps volume plugin requests onto registry operations.
It fixes response shapes and leaves the transport to the host process.
"""
