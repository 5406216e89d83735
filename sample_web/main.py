"""FastAPI приложение, демонстрирующее работу zoomclient."""

from fastapi import FastAPI

from sample_web.config import get_sample_settings
from sample_web.exceptions import APIException
from sample_web.middleware import LoggingMiddleware, api_exception_handler
from sample_web.routers import health, home

settings = get_sample_settings()

app = FastAPI(title=settings.api_title, version=settings.api_version)

app.add_middleware(LoggingMiddleware)
app.add_exception_handler(APIException, api_exception_handler)

app.include_router(health.router)
app.include_router(home.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sample_web.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
