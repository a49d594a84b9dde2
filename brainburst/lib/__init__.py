__all__ = [
    "NotSet",
    "is_set",
]

from .sentinel import is_set, NotSet
