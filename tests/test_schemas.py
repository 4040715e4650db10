"""
Tests for request validation and response serialisation.
"""
import pytest
from pydantic import ValidationError

from domain_search.schemas.search import (
    DomainSearch,
    DomainSearchRequest,
    DomainSearchResult,
    EnrichedDomain,
    SearchOptions,
)


class TestDomainSearchValidation:
    """Filter shapes as sent by the search form."""

    def test_camel_case_payload(self):
        search = DomainSearch.model_validate(
            {
                "companyName": {"value": "Acme", "matchType": "exact", "caseSensitive": True},
                "technologies": {"requireAll": ["React"]},
                "technologyCategories": [{"category": "CMS", "minCount": 1, "operator": "OR"}],
                "totalSpendRange": {"min": 0.5},
                "technologyCountRange": {"max": 4, "inclusive": False},
            }
        )
        assert search.company_name.match_type == "exact"
        assert search.company_name.case_sensitive is True
        assert search.technologies.require_all == ("React",)
        assert search.technology_categories[0].operator == "OR"
        assert search.total_spend_range.min == 0.5
        assert search.technology_count_range.inclusive is False

    def test_defaults(self):
        search = DomainSearch.model_validate(
            {
                "domain": {"value": "acme"},
                "technologyCategories": [{"category": "CMS"}],
                "totalSpendRange": {"max": 10},
            }
        )
        assert search.domain.match_type == "contains"
        assert search.domain.case_sensitive is False
        assert search.technology_categories[0].operator == "AND"
        assert search.total_spend_range.inclusive is True

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_string_filter_dropped(self, value):
        search = DomainSearch.model_validate({"domain": {"value": value}})
        assert search.domain is None

    def test_string_value_kept_as_sent(self):
        search = DomainSearch.model_validate({"domain": {"value": "  acme  ", "matchType": "exact"}})
        assert search.domain.value == "  acme  "

    @pytest.mark.parametrize(
        "payload",
        [
            {"domain": {"value": "a", "matchType": "regex"}},
            {"technologyCategories": [{"category": "CMS", "minCount": -1}]},
            {"technologyCategories": [{"category": "CMS", "minCount": 3, "maxCount": 1}]},
            {"technologyCategories": [{"category": "CMS", "operator": "XOR"}]},
            {"technologyCategories": [{"category": " "}]},
            {"totalSpendRange": {"min": 10, "max": 1}},
            {"technologyCountRange": {"min": 1.5}},
            {"technologyCountRange": {"min": -1}},
        ],
    )
    def test_malformed_filters_rejected(self, payload):
        with pytest.raises(ValidationError):
            DomainSearch.model_validate(payload)

    def test_error_names_the_field(self):
        with pytest.raises(ValidationError) as excinfo:
            DomainSearch.model_validate({"totalSpendRange": {"min": "lots"}})
        locations = [error["loc"] for error in excinfo.value.errors()]
        assert ("totalSpendRange", "min") in locations

    def test_frozen(self):
        search = DomainSearch.model_validate({"category": {"include": ["Retail"]}})
        with pytest.raises(ValidationError):
            search.category = None


class TestSearchOptions:
    def test_sort_order_normalised(self):
        assert SearchOptions.model_validate({"sortOrder": "desc"}).sort_order == "DESC"

    def test_bad_sort_order_rejected(self):
        with pytest.raises(ValidationError):
            SearchOptions.model_validate({"sortOrder": "sideways"})

    def test_sort_by_not_validated_here(self):
        """Unknown sort fields are handled by the compiler fallback."""
        options = SearchOptions.model_validate({"sortBy": "whatever"})
        assert options.sort_by == "whatever"

    def test_request_defaults(self):
        request = DomainSearchRequest.model_validate({})
        assert request.search_params == DomainSearch()
        assert request.options.page == 1
        assert request.options.limit is None


class TestOutput:
    def test_json_collections_parsed(self):
        domain = EnrichedDomain(
            id=1,
            domain="acme.com",
            social_links='["https://x.com/acme"]',
            people='[{"Name": "Ada", "Title": "CEO"}]',
            emails="{broken",
            phones='{"not": "a list"}',
        )
        assert domain.social_links == ["https://x.com/acme"]
        assert domain.people == [{"Name": "Ada", "Title": "CEO"}]
        assert domain.emails is None
        assert domain.phones is None

    def test_result_serialises_with_wire_names(self):
        result = DomainSearchResult(
            domains=[EnrichedDomain(id=1, domain="acme.com")], total_count=1
        )
        dumped = result.model_dump(by_alias=True)
        assert dumped["totalCount"] == 1
        stats = dumped["domains"][0]["technologyStats"]
        assert stats["technologyCategories"] == {}
        assert stats["total_technologies"] == 0
