"""Template and request utilities."""
