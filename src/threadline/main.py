from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from threadline import __version__
from threadline.api.check import router as check_api_router
from threadline.api.errors import create_error_response
from threadline.core.config import config
from threadline.core.utils.logging import configure_logging

# --- Application Setup ---

configure_logging(config.logging)

app = FastAPI(
    title="Threadline",
    description="Checks code changes against natural-language rules.",
    version=__version__,
)

# --- Error Handling ---


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed check requests with 400 before any work starts."""
    problems = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")} for error in exc.errors()
    ]
    message = "; ".join(f"{'.'.join(problem['loc'])}: {problem['msg']}" for problem in problems)
    body = create_error_response("invalid_request", message or "Invalid request", details={"errors": problems})
    return JSONResponse(status_code=400, content=body.model_dump())


# --- Include Routers ---

app.include_router(check_api_router, prefix="/api/v1", tags=["Checks"])

# --- Root Endpoint ---


@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the service is running."""
    return {"status": "ok", "message": "Threadline is running."}
