"""
Main entrypoint for the FastAPI server
"""

import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from pydantic import ValidationError
from core.config import get_settings, load_env_file
from core.exception_handlers import register_exception_handlers
from core.exceptions import ConfigurationError
from core.lifespan import lifespan
from core.logger import logger, set_log_level

from api.files.routes import router as files_router
from api.greeting.routes import router as greeting_router


# Customize route id's
# Helpful for creating sensible names in the client
def custom_generate_unique_id(route: APIRoute):
    """ Generate unique route IDs based on route name """
    return f"{route.name}_{route.path.strip('/').replace('/', '_')}"


# Create schema & router
app = FastAPI(
    title="Filer API",
    lifespan=lifespan,
    generate_unique_id_function=custom_generate_unique_id
)

register_exception_handlers(app)

# REST routers
# Add each api/feature folder here
API_PREFIX = "/api"

app.include_router(greeting_router, prefix=API_PREFIX)
app.include_router(files_router, prefix=API_PREFIX)


# Health check endpoint for monitoring
@app.get("/api/health", tags=["health"])
def health_check():
    return {"status": "ok", "message": "Filer API is running"}


def run() -> None:
    """
    Load the environment, validate settings and serve the API.

    Exits with status 1 when the environment file or a required
    setting is missing.
    """
    import uvicorn

    try:
        load_env_file()
        settings = get_settings()
    except ConfigurationError as exc:
        logger.error(exc.message)
        sys.exit(1)
    except ValidationError as exc:
        missing = ", ".join(str(error["loc"][0]) for error in exc.errors())
        logger.error("missing or invalid environment variables: %s", missing)
        sys.exit(1)

    set_log_level(settings.LOG_LEVEL)

    # CORS settings to allow client-server communication
    if settings.CLIENT_ORIGIN:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[settings.CLIENT_ORIGIN],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    port = settings.FUNCTIONS_CUSTOMHANDLER_PORT
    logger.info("About to listen on :%s. Go to http://127.0.0.1:%s/", port, port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
