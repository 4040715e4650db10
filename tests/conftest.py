import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from domain_search.core.db import Base
# Imported for table registration on Base.metadata
from domain_search.models import domain, domain_stats, domain_technology, technology  # noqa: F401
from domain_search.services.stats import rebuild_domain_stats

from tests.fixtures.search_fixtures import (
    CATALOG_DOMAINS,
    CATALOG_LINKS,
    SCENARIO_DOMAINS,
    SCENARIO_LINKS,
    seed,
)


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = _memory_engine()
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def scenario_db(db):
    seed(db, SCENARIO_DOMAINS, SCENARIO_LINKS)
    rebuild_domain_stats(db)
    db.commit()
    return db


@pytest.fixture
def catalog_db(db):
    seed(db, CATALOG_DOMAINS, CATALOG_LINKS)
    rebuild_domain_stats(db)
    db.commit()
    return db


@pytest.fixture
def broken_db():
    """Session on a database where no table exists."""
    engine = _memory_engine()
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def executed_statements(engine):
    """SQL text of every statement sent to the test engine."""
    statements = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine, "before_cursor_execute", _record)
