"""Internal modules for relay-rpc.

These are not intended for direct use in application code.

Modules:
    http - Shared HTTP client configuration
"""
