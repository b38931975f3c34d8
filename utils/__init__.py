"""
Shared helpers: logging setup and library path utilities.
"""
