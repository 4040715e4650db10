from .assembler import QueryPair, assemble
from .conditions import compile_conditions
from .enrichment import enrich_domains
from .errors import QueryAssemblyError, SearchExecutionError
from .executor import execute_search
from .joins import PlannedJoin, plan_joins
from .ordering import Ordering, compile_ordering

__all__ = [
    "QueryPair",
    "assemble",
    "compile_conditions",
    "enrich_domains",
    "QueryAssemblyError",
    "SearchExecutionError",
    "execute_search",
    "PlannedJoin",
    "plan_joins",
    "Ordering",
    "compile_ordering",
]
