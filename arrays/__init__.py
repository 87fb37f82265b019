"""
arrays/
-------
Core data layer.  Public API:

    from arrays import ArrayState, generate_random_array
"""

from arrays.state import ArrayState, generate_random_array

__all__ = [
    "ArrayState",
    "generate_random_array",
]
