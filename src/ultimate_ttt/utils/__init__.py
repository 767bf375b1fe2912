"""
Utilities - engine configuration.
"""
