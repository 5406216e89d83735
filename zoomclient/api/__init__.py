from .cache import CacheEntryOptions, MemoryTokenCache, RedisTokenCache, TokenCache, build_token_cache
from .exceptions import ZoomAPIError, ZoomAuthenticationError, ZoomRequestError, ZoomResponseError
from .rate_limit import RateLimit
from .token_manager import TokenManager
from .zoom_api import ZoomAPI

__all__ = [
    "CacheEntryOptions",
    "MemoryTokenCache",
    "RateLimit",
    "RedisTokenCache",
    "TokenCache",
    "TokenManager",
    "ZoomAPI",
    "ZoomAPIError",
    "ZoomAuthenticationError",
    "ZoomRequestError",
    "ZoomResponseError",
    "build_token_cache",
]
