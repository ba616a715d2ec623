"""Forms API — register form definitions and validate submissions against them."""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

import structlog

from formguard.exceptions import (
    FormAlreadyRegisteredError,
    FormNotFoundError,
    RegistryFullError,
)
from formguard.models.forms import FormDefinition
from formguard.models.requests import SubmissionRequest
from formguard.models.responses import FormSummaryResponse, SubmissionOutcome
from formguard.services.form_registry import FormRegistry
from formguard.services.form_runtime import FormRuntime

logger = structlog.get_logger()

router = APIRouter()


def _registry(request: Request) -> FormRegistry:
    return request.app.state.form_registry


def _get_runtime(request: Request, form_id: str) -> FormRuntime:
    try:
        return _registry(request).get(form_id)
    except FormNotFoundError:
        raise HTTPException(status_code=404, detail=f"Form {form_id} not found")


def _summary(runtime: FormRuntime) -> FormSummaryResponse:
    layout = runtime.layout
    return FormSummaryResponse(
        form_id=runtime.form_id,
        field_ids=layout.field_ids,
        groups=layout.groups,
        ungrouped=layout.ungrouped,
        custom_validations=len(runtime.engine.custom_validations),
    )


# ─── Endpoints ───


@router.post("/forms", response_model=FormSummaryResponse, status_code=201)
async def register_form(definition: FormDefinition, request: Request):
    """Compile and register a form definition."""
    try:
        runtime = _registry(request).register(definition)
    except FormAlreadyRegisteredError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RegistryFullError as e:
        raise HTTPException(status_code=429, detail=str(e))

    return _summary(runtime)


@router.get("/forms", response_model=list[str])
async def list_forms(request: Request):
    """List registered form ids."""
    return _registry(request).list_ids()


@router.get("/forms/{form_id}", response_model=FormSummaryResponse)
async def get_form(form_id: str, request: Request):
    """Get the compiled structure of a form."""
    return _summary(_get_runtime(request, form_id))


@router.delete("/forms/{form_id}", status_code=204)
async def delete_form(form_id: str, request: Request):
    """Unregister a form."""
    try:
        _registry(request).delete(form_id)
    except FormNotFoundError:
        raise HTTPException(status_code=404, detail=f"Form {form_id} not found")


@router.post("/forms/{form_id}/submit", response_model=SubmissionOutcome)
def submit_form(form_id: str, body: SubmissionRequest, request: Request):
    """Validate a submission. Blocked submissions answer 422 with the violations."""
    runtime = _get_runtime(request, form_id)

    outcome = runtime.submit(body.values, body.checked, trigger=body.trigger)

    if not outcome.allowed:
        return JSONResponse(status_code=422, content=outcome.model_dump(mode="json"))
    return outcome
