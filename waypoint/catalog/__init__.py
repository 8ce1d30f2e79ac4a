"""
POI catalogue.

Responsibilities:
- Locate the catalogue file (configurable through the environment).
- Load it with pandas and validate every row into a ``PointOfInterest``.
- Keep the loaded catalogue in memory for the HTTP layer.
"""
