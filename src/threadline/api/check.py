import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from threadline.api.errors import create_error_response
from threadline.core.config import config
from threadline.core.errors import ConfigurationError
from threadline.core.models import AggregateReport
from threadline.llm.client import CompletionClient, build_completion_client
from threadline.services.check import CheckRequest, run_check

logger = structlog.get_logger()

router = APIRouter()

CHECK_DESCRIPTION = (
    "Evaluate a diff against every rule and return the actionable results. "
    "Only compliant and attention results are listed. `metadata` carries five counts: "
    "totalExperts, completed, timedOut, errors and skipped, where skipped counts rules "
    "whose patterns matched no changed file. completed + timedOut + errors + skipped == totalExperts."
)


def get_completion_client() -> CompletionClient:
    """Build the completion client, failing before any dispatch when credentials are missing."""
    config.validate()
    return build_completion_client()


@router.post(
    "/threadline-check",
    response_model=AggregateReport,
    response_model_exclude_none=True,
    description=CHECK_DESCRIPTION,
    responses={400: {"description": "Invalid request"}, 500: {"description": "Configuration or server error"}},
)
async def threadline_check(request: CheckRequest):
    logger.info("check_received", rules=len(request.rules), files=len(request.files))

    try:
        client = get_completion_client()
    except ConfigurationError as e:
        logger.error("check_configuration_error", errors=e.errors)
        body = create_error_response("configuration_error", f"Server configuration error: {e}")
        return JSONResponse(status_code=500, content=body.model_dump())
    except Exception as e:
        logger.exception("completion_client_failed", error=str(e))
        body = create_error_response("internal_error", str(e) or "Internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    try:
        report = await run_check(request.rules, request.to_diff_context(), client)
    except Exception as e:
        logger.exception("check_failed", error=str(e))
        body = create_error_response("internal_error", str(e) or "Internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    logger.info(
        "check_processed",
        results=len(report.results),
        completed=report.metadata.completed,
        timed_out=report.metadata.timed_out,
        errors=report.metadata.errors,
    )
    return report
