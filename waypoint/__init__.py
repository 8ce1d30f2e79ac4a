"""
Waypoint: points-of-interest discovery and trip planning engine.

Responsibilities:
- Great-circle distance and radius checks (``geo``).
- Composable filtering of restaurants and fuel stations (``filters``).
- Preference-weighted recommendations with a rationale (``recommendations``).
- Ordered itineraries with derived distance/duration (``trips``).
"""
