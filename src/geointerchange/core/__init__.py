"""
Shared library core: errors, settings, logging, type registry and reduction.
"""
