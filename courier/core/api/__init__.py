"""Mail service contracts and the collaborators the compose session uses."""

from .interfaces import MailApi, StatusNotifier, Throttle
from .memory import InMemoryMailApi
from .rate_limit import RateLimiter

__all__ = [
    "InMemoryMailApi",
    "MailApi",
    "RateLimiter",
    "StatusNotifier",
    "Throttle",
]
