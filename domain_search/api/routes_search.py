from uuid import uuid4
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.search import DomainSearchRequest, DomainSearchResponse
from ..services.search import SearchExecutionError, execute_search

router = APIRouter(tags=["search"])

logger = logging.getLogger(__name__)


@router.post("/domain-search", response_model=DomainSearchResponse)
def search_domains(
    payload: DomainSearchRequest,
    db: Session = Depends(get_db),
):
    """
    Filtered, sorted and paginated domain search.

    Malformed filters are rejected by request validation (422) before any
    query is compiled.
    """
    # Correlation ID so count/select/enrich log lines can be tied together
    request_id = str(uuid4())

    try:
        result = execute_search(
            db,
            payload.search_params,
            payload.options,
            request_id=request_id,
        )
    except SearchExecutionError as exc:
        return JSONResponse(
            status_code=500,
            content={"error": "Search operation failed", "message": str(exc)},
        )

    return DomainSearchResponse(data=result)
