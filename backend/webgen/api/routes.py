import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from webgen.api.serializers import serialize_stored
from webgen.db.store import BundleStore
from webgen.ir.errors import InvalidInput, PersistenceError, TransportError
from webgen.pipeline.controller import PipelineController
from webgen.schemas import (
    BundleListResponse,
    ChatResponse,
    GenerateRequest,
    GenerateResponse,
    StoredBundleOut,
)


logger = logging.getLogger(__name__)

router = APIRouter()

TRANSPORT_FAILURE_MESSAGE = "The AI service is temporarily unavailable. Please try again."
GENERATION_FAILURE_MESSAGE = "Could not understand the generated result. Please try again."
STORAGE_FAILURE_MESSAGE = "Could not save the generated result. Please try again."


def get_pipeline(request: Request) -> PipelineController:
    return request.app.state.pipeline


def get_store(request: Request) -> BundleStore:
    return request.app.state.store


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "error": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/generate", response_model=GenerateResponse)
def generate_bundle(
    request: GenerateRequest,
    pipeline: PipelineController = Depends(get_pipeline),
    store: BundleStore = Depends(get_store),
):
    try:
        context = pipeline.run(request.message)
    except InvalidInput as e:
        return error_response(400, str(e))
    except TransportError as e:
        logger.error("[Routes] transport failure: %s", e.to_dict())
        return error_response(502, TRANSPORT_FAILURE_MESSAGE)

    if not context.succeeded:
        error = context.normalization.error
        logger.warning(
            "[Routes] generation failed: %s at stage %s: %s",
            error.kind.value,
            error.stage,
            error.diagnostic,
        )
        return error_response(422, GENERATION_FAILURE_MESSAGE)

    try:
        record = store.insert(request.message, context.bundle)
    except PersistenceError:
        return error_response(500, STORAGE_FAILURE_MESSAGE)

    stored = serialize_stored(record)

    return GenerateResponse(
        status="success",
        id=stored["id"],
        created_at=stored["created_at"],
        stage=context.normalization.stage,
        bundle=stored["bundle"],
    )


@router.post("/chat", response_model=ChatResponse)
def chat(
    request: GenerateRequest,
    pipeline: PipelineController = Depends(get_pipeline),
):
    """Raw completion passthrough, no normalization."""
    try:
        context = pipeline.complete(request.message)
    except InvalidInput as e:
        return error_response(400, str(e))
    except TransportError as e:
        logger.error("[Routes] transport failure: %s", e.to_dict())
        return error_response(502, TRANSPORT_FAILURE_MESSAGE)

    return ChatResponse(status="success", content=context.completion)


@router.get("/bundles", response_model=BundleListResponse)
def list_bundles(
    limit: int = Query(20, ge=1, le=100),
    store: BundleStore = Depends(get_store),
):
    return BundleListResponse(
        status="success",
        bundles=[serialize_stored(r) for r in store.list(limit=limit)],
    )


@router.get("/bundles/{bundle_id}", response_model=StoredBundleOut)
def get_bundle(bundle_id: str, store: BundleStore = Depends(get_store)):
    record = store.get(bundle_id)
    if record is None:
        return error_response(404, f"bundle {bundle_id} not found")
    return serialize_stored(record)
