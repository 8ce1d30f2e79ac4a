"""
Filter pipeline over points of interest.

Responsibilities:
- Represent optional, independent filter criteria (unset vs. empty set).
- Apply every active criterion as an order-independent predicate.
- Sort filtered results by the discovery sort options.
"""
from .models import FilterCriteria, SortOption
from .pipeline import apply, build_predicates
from .sorting import sort_pois

__all__ = ["FilterCriteria", "SortOption", "apply", "build_predicates", "sort_pois"]
