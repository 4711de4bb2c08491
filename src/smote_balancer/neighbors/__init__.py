"""
Neighbors module for exact k-nearest-neighbor queries.
"""

from .linear_search import LinearNNSearch

__all__ = [
    'LinearNNSearch'
]
