from .api import (
    MemoryTokenCache,
    RedisTokenCache,
    TokenManager,
    ZoomAPI,
    ZoomAPIError,
    ZoomAuthenticationError,
    ZoomRequestError,
    ZoomResponseError,
)
from .config import ZoomConfig, ZoomSettings, get_config_by_account, load_config_from_file
from .logger import get_logger, setup_logger
from .models import (
    Err,
    ErrorKind,
    Meeting,
    MeetingRequest,
    Ok,
    PagedResult,
    Participant,
    PlanUsage,
    Recurrence,
    User,
    UserInfo,
    UserRequest,
    UserUpdate,
)

__version__ = "1.0.0"

__all__ = [
    # API
    'ZoomAPI',
    'TokenManager',
    'MemoryTokenCache',
    'RedisTokenCache',
    # Errors
    'ZoomAPIError',
    'ZoomAuthenticationError',
    'ZoomRequestError',
    'ZoomResponseError',
    # Config
    'ZoomConfig',
    'ZoomSettings',
    'load_config_from_file',
    'get_config_by_account',
    # Logger
    'get_logger',
    'setup_logger',
    # Models
    'Ok',
    'Err',
    'ErrorKind',
    'PagedResult',
    'User',
    'UserInfo',
    'UserRequest',
    'UserUpdate',
    'Meeting',
    'MeetingRequest',
    'Recurrence',
    'Participant',
    'PlanUsage',
]
