from .uri import is_absolute_uri

__all__ = [
    "is_absolute_uri",
]
