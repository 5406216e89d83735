"""Base Pydantic model configuration for Zoom API objects"""

from pydantic import ConfigDict

# Zoom добавляет поля без предупреждения, поэтому неизвестные ключи игнорируются
ZOOM_MODEL_CONFIG = ConfigDict(
    populate_by_name=True,
    extra="ignore",
)

# Конфигурация для тел запросов: None-поля не отправляются (см. to_payload)
REQUEST_MODEL_CONFIG = ConfigDict(
    populate_by_name=True,
    extra="forbid",
)
