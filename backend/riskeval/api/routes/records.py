"""Endpoints del ciclo de vida de las evaluaciones de riesgo."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from riskeval.api.response_builder import build_list_response, build_submission_response
from riskeval.core.exceptions import RecordNotFoundError, ValidationFailure
from riskeval.core.logging import get_logger
from riskeval.schemas import (
    EditCursorResponse,
    EditFormResponse,
    OperationResponse,
    RecordListResponse,
    RiskFormInput,
    SubmissionResponse,
)
from riskeval.services import RecordManager, get_record_manager

logger = get_logger(__name__)
router = APIRouter()


@router.get("/records", response_model=RecordListResponse)
async def list_records(
    sort: Optional[str] = None,
    manager: RecordManager = Depends(get_record_manager),
) -> RecordListResponse:
    """Lista los registros; `sort` cambia el criterio activo."""
    if sort is not None:
        manager.re_sort(sort)
    return build_list_response(manager)


@router.post("/records", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_record(
    form: RiskFormInput,
    manager: RecordManager = Depends(get_record_manager),
) -> SubmissionResponse:
    """Crea un registro, o reemplaza el que está en edición."""
    result = manager.submit(form)
    if not result.ok:
        raise ValidationFailure(result.errors)
    return build_submission_response(result)


@router.get("/records/edit", response_model=EditCursorResponse)
async def get_edit_cursor(manager: RecordManager = Depends(get_record_manager)) -> EditCursorResponse:
    return EditCursorResponse(editing_id=manager.edit_cursor)


@router.delete("/records/edit", response_model=EditCursorResponse)
async def cancel_edit(manager: RecordManager = Depends(get_record_manager)) -> EditCursorResponse:
    """Cancela la edición en curso."""
    manager.cancel_edit()
    return EditCursorResponse(editing_id=None)


@router.post("/records/{record_id}/edit", response_model=EditFormResponse)
async def begin_edit(
    record_id: int,
    manager: RecordManager = Depends(get_record_manager),
) -> EditFormResponse:
    """Marca un registro para edición y devuelve sus valores de formulario."""
    form = manager.begin_edit(record_id)
    if form is None:
        raise RecordNotFoundError(record_id)
    return EditFormResponse(id=record_id, form=form)


@router.delete("/records/{record_id}", response_model=OperationResponse)
async def delete_record(
    record_id: int,
    manager: RecordManager = Depends(get_record_manager),
) -> OperationResponse:
    manager.remove(record_id)
    return OperationResponse(status="success", message="Risk deleted", remaining=len(manager))


@router.delete("/records", response_model=OperationResponse)
async def clear_records(manager: RecordManager = Depends(get_record_manager)) -> OperationResponse:
    """Elimina todos los registros."""
    manager.clear_all()
    logger.info("All records cleared via API")
    return OperationResponse(status="success", message="All risks have been deleted", remaining=len(manager))
