"""
Recommendation engine.

Responsibilities:
- Drop already-favorited points of interest from the candidate pool.
- Narrow the pool to the traveler's preferred cuisines and budget, falling
  back to the full pool when nothing matches.
- Rank deterministically (rating, review count, id).
- Attach a single human-readable rationale to every recommendation.
"""
