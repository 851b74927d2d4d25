import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Load env from roshdman/.env
package_dir = os.path.dirname(os.path.abspath(__file__))
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv(dotenv_path=os.path.join(package_dir, ".env"))

# Import after dotenv is loaded
from roshdman.core.config import settings, validate_config  # noqa: E402
from roshdman.core.logging import configure_logging  # noqa: E402
from roshdman.core.middleware.request_id import RequestIdMiddleware  # noqa: E402
from roshdman.core.errors import (  # noqa: E402
    AppError,
    app_error_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from roshdman.api import auth, challenges, invitations, profile, charities, health  # noqa: E402

configure_logging(settings.ENV, settings.LOG_LEVEL)
validate_config(strict=getattr(settings, "CONFIG_STRICT", False))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("roshdman")
    logger.info(f"Starting Roshdman backend (data file: {settings.DATA_FILE})...")
    try:
        yield
    finally:
        logging.getLogger("roshdman").info("Stopping Roshdman backend...")


app = FastAPI(title="Roshdman - Backend", lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Cross-origin requests are allowed unconditionally unless origins are configured
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, tags=["auth"])
app.include_router(challenges.router, tags=["challenges"])
app.include_router(invitations.router, tags=["invitations"])
app.include_router(profile.router)
app.include_router(charities.router, tags=["charities"])
app.include_router(health.router)


def run() -> None:
    """Console entrypoint: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "roshdman.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()
