from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from resource_finder.models.resources import FailureMetadata, FailureResponse, ResourceRequest
from resource_finder.services.logging import logger, sanitize_error
from resource_finder.services.pipeline import ResourcePipeline, get_resource_pipeline, utc_timestamp

router = APIRouter()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": message})


@router.post("/resources")
async def fetch_resources(
    request: ResourceRequest,
    pipeline: ResourcePipeline = Depends(get_resource_pipeline),
):
    """
    Recommend learning resources for analyzed code.

    Both the analyzer's code context and the upstream review are required.
    """
    if request.code_context is None:
        return _bad_request("Missing codeContext")

    if request.review_response is None:
        return _bad_request("Missing reviewResponse - cannot extract concrete anchors")

    try:
        result = await pipeline.run(
            request.code_context,
            request.review_response,
            source_code=request.source_code,
            user_intent=request.user_intent,
        )
    except Exception as e:
        logger.error(f"Resources endpoint failed: {sanitize_error(e)}", exc_info=True)
        failure = FailureResponse(
            error=sanitize_error(e) or "Failed to fetch resources",
            metadata=FailureMetadata(error_type=type(e).__name__, timestamp=utc_timestamp()),
        )
        return JSONResponse(status_code=500, content=failure.model_dump(mode="json", by_alias=True))

    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))
