from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from actionthreads.core.config import get_settings
from actionthreads.core.logging import configure_logging
from actionthreads.api.errors import register_exception_handlers
from actionthreads.api.routers import (
    health,
    users,
    threads,
    transcripts,
    action_points,
)

settings = get_settings()
configure_logging(settings.log_level, service=settings.app_name)

app = FastAPI(title=settings.app_name)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

def _include(router):
    app.include_router(router, prefix=settings.api_prefix)

_include(health.router)
_include(users.router)
_include(threads.router)
_include(transcripts.router)
_include(action_points.router)

@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "ok"}
