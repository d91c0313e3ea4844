"""/v1/fields - calculator field events (focus, blur, keystroke input)"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from interest_calc.api.v1.schemas import FieldInputRequest, FieldInputResponse, FieldsResponse, FieldViewSchema
from interest_calc.api.dependencies import get_rate_graph, get_request_id
from interest_calc.domain.exceptions import ReadOnlyFieldError, UnknownFieldError
from interest_calc.domain.models import FieldView
from interest_calc.domain.rate_graph import RateGraph
from interest_calc.infrastructure.observability.metrics import record_field_edit
from interest_calc.infrastructure.observability.logging import log_field_edit

router = APIRouter()


def _to_schema(views: List[FieldView]) -> List[FieldViewSchema]:
    return [
        FieldViewSchema(
            field_id=view.field_id.value,
            label=view.label,
            description=view.description,
            display_text=view.display_text,
            is_error=view.is_error,
            focused=view.focused,
            editable=view.editable,
            percent=view.percent,
        )
        for view in views
    ]


def _field_error(e: Exception) -> HTTPException:
    if isinstance(e, UnknownFieldError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))


# Handlers are async so every field update runs on the event loop thread, one at a time


@router.get("/fields", response_model=FieldsResponse)
async def list_fields(graph: RateGraph = Depends(get_rate_graph)):
    """Current display state of every field"""
    return FieldsResponse(fields=_to_schema(graph.views()))


@router.post("/fields/{field_id}/focus", response_model=FieldsResponse)
async def focus_field(field_id: str, graph: RateGraph = Depends(get_rate_graph)):
    """Field gained focus: start showing its raw text buffer"""
    try:
        graph.focus(field_id)
    except (UnknownFieldError, ReadOnlyFieldError) as e:
        raise _field_error(e)
    return FieldsResponse(fields=_to_schema(graph.views()))


@router.post("/fields/{field_id}/blur", response_model=FieldsResponse)
async def blur_field(field_id: str, graph: RateGraph = Depends(get_rate_graph)):
    """Field lost focus: drop the raw buffer and show the canonical value"""
    try:
        graph.blur(field_id)
    except UnknownFieldError as e:
        raise _field_error(e)
    return FieldsResponse(fields=_to_schema(graph.views()))


@router.post("/fields/{field_id}/input", response_model=FieldInputResponse)
async def input_field(
    field_id: str,
    request_body: FieldInputRequest,
    request: Request,
    graph: RateGraph = Depends(get_rate_graph),
):
    """
    Apply one keystroke to a field.

    Flow:
    1. Buffer the raw text (focusing the field if needed)
    2. Substitute currency codes and evaluate
    3. On success, update amount or yearly rate and re-derive every field
    4. Return every field's display state
    """
    request_id = get_request_id(request)

    try:
        outcome = graph.input(field_id, request_body.raw_text)
    except (UnknownFieldError, ReadOnlyFieldError) as e:
        logging.warning(f"Rejected field input: {e}", extra={"request_id": request_id})
        raise _field_error(e)

    field = graph.field(field_id)
    record_field_edit(field.spec.field_id.value, outcome.value)
    log_field_edit(request_id, field.spec.field_id.value, outcome.value, field.error)

    return FieldInputResponse(
        field_id=field.spec.field_id.value,
        outcome=outcome.value,
        error=field.error,
        fields=_to_schema(graph.views()),
    )
