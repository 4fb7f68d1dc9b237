"""
Core domain models, mathematical primitives, and configuration.

Pure computation: no I/O, no retained state between calls.
"""
