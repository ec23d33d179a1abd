"""Transport boundary to the remote automation server."""

from .endpoints import ENDPOINTS, Endpoint
from .session import HttpSession, Session, classify_error

__all__ = ["ENDPOINTS", "Endpoint", "HttpSession", "Session", "classify_error"]
