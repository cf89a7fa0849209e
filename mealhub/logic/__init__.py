"""Core business logic layer.

Subpackages:
- planning: weekly window resolution
- shopping: building shopping lists from planned meals
"""
__all__ = ["planning", "shopping"]
