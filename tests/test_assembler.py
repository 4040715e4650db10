"""
Tests for the COUNT / SELECT statement pair.
"""
import pytest
from sqlalchemy import select

from domain_search.models.domain import Domain
from domain_search.schemas.search import DomainSearch, SearchOptions
from domain_search.services.search.assembler import _check_shared_params, assemble
from domain_search.services.search.errors import QueryAssemblyError

FULL_SEARCH = {
    "domain": {"value": "a"},
    "category": {"exclude": ["Media"]},
    "technologies": {"include": ["React"], "exclude": ["Node"], "requireAll": ["React"]},
    "technologyCategories": [{"category": "JavaScript Frameworks", "minCount": 1}],
    "totalSpendRange": {"min": 1, "max": 1000},
    "technologyCountRange": {"min": 1},
}


def _where(sql: str) -> str:
    return sql.split("WHERE", 1)[1].split("ORDER BY", 1)[0]


class TestAssemble:
    """Shape of the assembled statements."""

    def test_empty_search_has_no_where(self):
        queries = assemble(DomainSearch())
        assert "WHERE" not in str(queries.count)
        assert "WHERE" not in str(queries.select)

    def test_count_statement(self):
        sql = str(assemble(DomainSearch.model_validate(FULL_SEARCH)).count)
        assert sql.startswith("SELECT count(DISTINCT domains.id) AS total")
        assert "ORDER BY" not in sql
        assert "LIMIT" not in sql

    def test_select_statement(self):
        queries = assemble(
            DomainSearch.model_validate(FULL_SEARCH), SearchOptions(limit=5, page=2)
        )
        sql = str(queries.select)
        assert sql.startswith("SELECT DISTINCT domains.id")
        assert "ORDER BY domains.domain ASC, domains.id ASC" in sql
        assert "LIMIT" in sql and "OFFSET" in sql
        assert queries.ordering.offset == 5

    def test_count_and_select_share_filters(self):
        """Same FROM / JOIN / WHERE text in both statements."""
        queries = assemble(DomainSearch.model_validate(FULL_SEARCH))
        count_sql = str(queries.count)
        select_sql = str(queries.select)
        assert _where(count_sql).strip() == _where(select_sql).strip()
        assert count_sql.split("FROM", 1)[1].split("WHERE")[0] == (
            select_sql.split("FROM", 1)[1].split("WHERE")[0]
        )

    def test_count_params_are_prefix_of_select_params(self):
        queries = assemble(
            DomainSearch.model_validate(FULL_SEARCH), SearchOptions(limit=3)
        )
        count_params = queries.count.compile().params
        select_params = queries.select.compile().params
        for name, value in count_params.items():
            assert select_params[name] == value
        assert len(select_params) == len(count_params) + 2  # limit, offset

    def test_stats_sort_column_selected_and_joined(self):
        queries = assemble(
            DomainSearch(), SearchOptions(sort_by="ds.total_spend", sort_order="DESC")
        )
        select_sql = str(queries.select)
        assert "domain_stats.total_spend" in select_sql.split("FROM", 1)[0]
        assert "ORDER BY domain_stats.total_spend DESC" in select_sql
        assert "LEFT OUTER JOIN domain_stats" in str(queries.count)

    def test_query_text_is_reproducible(self):
        """Compiling the same search twice yields identical SQL."""
        first = assemble(DomainSearch.model_validate(FULL_SEARCH))
        second = assemble(DomainSearch.model_validate(FULL_SEARCH))
        assert str(first.count) == str(second.count)
        assert str(first.select) == str(second.select)


class TestSharedParamsCheck:
    """Guard against COUNT and SELECT drifting apart."""

    def test_diverging_params_raise(self):
        count_stmt = select(Domain.id).where(Domain.domain == "alpha.com")
        select_stmt = select(Domain).where(Domain.domain == "beta.com")
        with pytest.raises(QueryAssemblyError, match="diverge"):
            _check_shared_params(count_stmt, select_stmt)

    def test_matching_params_pass(self):
        condition = Domain.domain == "alpha.com"
        _check_shared_params(
            select(Domain.id).where(condition),
            select(Domain).where(condition).limit(1),
        )
