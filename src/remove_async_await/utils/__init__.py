"""
Shared helpers: console and logging, source extraction, node rendering.
"""
