# app/main.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes import conflicts, health, occurrences, rooms, week_grid
from app.core.config import get_settings
from app.core.exceptions import AppError
from app.core.logging import configure_logging
from app.db.session import init_db_for_startup


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


def create_app() -> FastAPI:
    """
    Application factory for the Timetable Engine service.
    """
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Read-only timetable service: expands recurring course meetings and\n"
            "their exceptions into concrete occurrences, finds free rooms,\n"
            "detects room/professor conflicts and assembles weekly grids."
        ),
        version="0.1.0",
    )
    app.add_exception_handler(AppError, app_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(occurrences.router)
    app.include_router(rooms.router)
    app.include_router(week_grid.router)
    app.include_router(conflicts.router)

    @app.on_event("startup")
    async def on_startup() -> None:  # pragma: no cover
        await init_db_for_startup()

    return app


app = create_app()
