"""
Routes/endpoints for the greeting API
"""

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Greeting Endpoints"])

DEFAULT_MESSAGE = (
    "This HTTP triggered function executed successfully. "
    "Pass a name in the query string for a personalized response.\n"
)


@router.get("/HttpExample", response_class=PlainTextResponse)
@router.get("/HttpTrigger", response_class=PlainTextResponse)
def greet(name: str = Query("", description="Name to greet")) -> str:
    """
    Return a greeting, personalized when a name is given.
    """
    if name:
        return f"Hello, {name}. This HTTP triggered function executed successfully.\n"
    return DEFAULT_MESSAGE
