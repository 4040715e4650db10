from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.db import get_db
from ..services import options

router = APIRouter(prefix="/options", tags=["options"])

settings = get_settings()


def _safe_limit(limit: int) -> int:
    return max(1, min(limit, settings.MAX_PAGE_SIZE))


@router.get("/categories", response_model=List[str])
def get_categories(db: Session = Depends(get_db)):
    return options.list_categories(db)


@router.get("/countries", response_model=List[str])
def get_countries(db: Session = Depends(get_db)):
    return options.list_countries(db)


@router.get("/technology-categories", response_model=List[str])
def get_technology_categories(db: Session = Depends(get_db)):
    return options.list_technology_categories(db)


@router.get("/company-names", response_model=List[str])
def get_company_names(
    search: str = "",
    limit: int = settings.OPTIONS_DEFAULT_LIMIT,
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return options.list_company_names(db, search, _safe_limit(limit), offset)


@router.get("/technologies", response_model=List[str])
def get_technologies(
    search: str = "",
    limit: int = settings.OPTIONS_DEFAULT_LIMIT,
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return options.list_technologies(db, search, _safe_limit(limit), offset)
