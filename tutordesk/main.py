# tutordesk/main.py
import logging

from fastapi import FastAPI

from tutordesk.api.routes import health, meetings, students, teaching_periods, users
from tutordesk.core.config import get_settings
from tutordesk.db.session import init_db_for_startup


def create_app() -> FastAPI:
    """
    Application factory for the TutorDesk service.
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Scheduling backend for private tutors: students, one-off and repeating\n"
            "meetings, and the academic calendar of terms and holidays with gap\n"
            "detection and current-week lookup."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(students.router)
    app.include_router(meetings.router)
    app.include_router(teaching_periods.terms_router)
    app.include_router(teaching_periods.holidays_router)
    app.include_router(teaching_periods.router)

    @app.on_event("startup")
    async def on_startup() -> None:  # pragma: no cover
        await init_db_for_startup()

    return app


app = create_app()
