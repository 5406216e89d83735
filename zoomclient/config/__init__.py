from .settings import (
    ZOOM_API_URL,
    ZOOM_BASE_URL,
    ZoomConfig,
    ZoomSettings,
    get_config_by_account,
    get_settings,
    load_config_from_file,
)

__all__ = [
    "ZOOM_API_URL",
    "ZOOM_BASE_URL",
    "ZoomConfig",
    "ZoomSettings",
    "get_config_by_account",
    "get_settings",
    "load_config_from_file",
]
