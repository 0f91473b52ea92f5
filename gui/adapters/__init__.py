"""GUI adapter layer.

This package provides thin Qt-shaped adapters over engine objects.

Notes
-----
Adapters exist to:
- keep GUI widgets free of engine details,
- turn live filtered views into Qt item models,
- translate engine domain errors into user-visible messages.
"""
