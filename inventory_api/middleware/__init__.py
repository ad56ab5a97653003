from .security import AuthenticationGate, extract_token
from .cors import CorsMiddleware

__all__ = ["AuthenticationGate", "extract_token", "CorsMiddleware"]
