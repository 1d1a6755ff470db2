import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .core.config import get_settings
from .core.logging import setup_logging
from .routers import achievements, ai, coach, injuries, leaderboard, performance, talents, tasks, users

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TalentHub",
    version="0.1.0",
)


@app.on_event("startup")
def report_ai_configuration() -> None:
    settings = get_settings()
    if not settings.ai_configured:
        log = logger.warning if settings.environment == "production" else logger.info
        log("OpenAI API key not configured, AI features disabled")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception: %s",
        exc,
        exc_info=True,
        extra={"extra_fields": {"method": request.method, "path": request.url.path}},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(users.router)
app.include_router(talents.router)
app.include_router(tasks.router)
app.include_router(achievements.router)
app.include_router(leaderboard.router)
app.include_router(coach.router)
app.include_router(performance.router)
app.include_router(injuries.router)
app.include_router(ai.router)


@app.get("/health", tags=["health"])
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
