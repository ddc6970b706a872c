"""
Shared utilities: errors, logging, identifiers and common types.
"""
