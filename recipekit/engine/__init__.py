"""
Recipe engine: similarity hashing, rendering and unit conversion.
"""
