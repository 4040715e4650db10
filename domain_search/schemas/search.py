# domain_search/schemas/search.py
import json
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MatchType = Literal["exact", "contains", "startsWith", "endsWith"]
CategoryOperator = Literal["AND", "OR", "NOT"]
SortOrder = Literal["ASC", "DESC"]


class _FilterModel(BaseModel):
    """Frozen request model accepting camelCase wire names and snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class StringFilter(_FilterModel):
    value: str
    match_type: MatchType = "contains"
    case_sensitive: bool = False

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        # Exact matches compare the value as sent, surrounding spaces included
        if not v.strip():
            raise ValueError("value must not be blank")
        return v


class LogicalFilter(_FilterModel):
    """
    include: match any of these values (OR)
    exclude: match none of these values (NOT)
    requireAll: match every one of these values (AND), multi-valued fields only
    """

    include: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None
    require_all: tuple[str, ...] | None = None


class RangeFilter(_FilterModel):
    min: float | None = None
    max: float | None = None
    inclusive: bool = True

    @model_validator(mode="after")
    def validate_bounds(self) -> "RangeFilter":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min must be less than or equal to max")
        return self


class CountRangeFilter(RangeFilter):
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class TechnologyCategoryFilter(_FilterModel):
    category: str
    min_count: int | None = Field(default=None, ge=0)
    max_count: int | None = Field(default=None, ge=0)
    # A single OR anywhere in the list makes the whole group inclusive
    operator: CategoryOperator = "AND"

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category must not be empty")
        return v

    @model_validator(mode="after")
    def validate_counts(self) -> "TechnologyCategoryFilter":
        if (
            self.min_count is not None
            and self.max_count is not None
            and self.min_count > self.max_count
        ):
            raise ValueError("minCount must be less than or equal to maxCount")
        return self


class DomainSearch(_FilterModel):
    """
    What the caller wants filtered. Every field is optional; an absent field
    places no constraint on the result.
    """

    domain: StringFilter | None = None
    company_name: StringFilter | None = None
    category: LogicalFilter | None = None
    country: LogicalFilter | None = None
    technologies: LogicalFilter | None = None
    technology_categories: tuple[TechnologyCategoryFilter, ...] | None = None
    total_spend_range: RangeFilter | None = None
    technology_count_range: CountRangeFilter | None = None

    @field_validator("domain", "company_name", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        # Blank text never reaches the compiler as a filter
        if isinstance(v, dict):
            value = v.get("value")
            if value is None or (isinstance(value, str) and not value.strip()):
                return None
        return v


class SearchOptions(_FilterModel):
    limit: int | None = Field(default=None, gt=0)
    page: int = Field(default=1, gt=0)
    sort_by: str | None = None
    sort_order: SortOrder = "ASC"

    @field_validator("sort_order", mode="before")
    @classmethod
    def _upper_sort_order(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class DomainSearchRequest(_FilterModel):
    search_params: DomainSearch = Field(default_factory=DomainSearch)
    options: SearchOptions = Field(default_factory=SearchOptions)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _parse_json_text(v: Any) -> Any:
    if v is None or isinstance(v, (list, dict)):
        return v
    if isinstance(v, str):
        try:
            return json.loads(v)
        except ValueError:
            return None
    return v


class TechnologyDetails(BaseModel):
    name: str
    category: str | None = None
    is_premium: str | None = None
    description: str | None = None
    spend: float | None = None
    subdomain: bool | None = None
    first_identified: datetime | None = None
    last_identified: datetime | None = None
    first_detected: datetime | None = None
    last_detected: datetime | None = None


class TechnologyStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_technologies: int = 0
    total_spend: float = 0
    technology_categories: dict[str, int] = Field(
        default_factory=dict, alias="technologyCategories"
    )


class EnrichedDomain(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    domain: str
    company_name: str | None = None
    category: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    zip_code: str | None = None
    social_links: list[str] | None = None
    emails: list[str] | None = None
    phones: list[str] | None = None
    people: list[dict[str, Any]] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    technologies: list[TechnologyDetails] = Field(default_factory=list)
    technology_stats: TechnologyStats = Field(
        default_factory=TechnologyStats, alias="technologyStats"
    )

    @field_validator("social_links", "emails", "phones", "people", mode="before")
    @classmethod
    def _parse_collections(cls, v):
        parsed = _parse_json_text(v)
        return parsed if isinstance(parsed, list) else None


class DomainSearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    domains: list[EnrichedDomain] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")


class DomainSearchResponse(BaseModel):
    data: DomainSearchResult
