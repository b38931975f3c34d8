"""
Configuration for the plugin class loader.
"""
