from .base import validate_request

__all__ = ["validate_request"]
