# This file defines the debtor status lookup endpoint.
# It exists so clients can fetch one borrower's status or many promise numbers in one call.
# A non-blank `promises` parameter switches to batch mode; otherwise the single-mode filters apply.
# Row objects keep their database column labels and numeric amounts are rendered as JSON numbers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from src.api.dependencies import get_debtor_status_service
from src.api.services.debtor_status_service import DebtorStatusService

router = APIRouter(tags=["debtor-status"])
DebtorStatusServiceDep = Annotated[DebtorStatusService, Depends(get_debtor_status_service)]


@router.get("/debtor_status_info", response_class=JSONResponse)
def debtor_status_info(
    service: DebtorStatusServiceDep,
    promises: str | None = Query(default=None, description="Comma-separated promise numbers (batch mode)."),
    idcard: str | None = Query(default=None, description="Borrower id card number, exact match."),
    promise: str | None = Query(default=None, description="Promise number, exact match."),
    province: str | None = Query(default=None, description="Province name, case-insensitive partial match."),
) -> JSONResponse:
    rows = service.lookup(promises=promises, idcard=idcard, promise=promise, province=province)
    return JSONResponse(content=jsonable_encoder(rows))
