"""Query repositories and predicate composition."""

from querystudy.infrastructure.repositories.member import (
    DtoBundle,
    MemberQueryRepository,
    relationship_loaded,
)
from querystudy.infrastructure.repositories.predicates import (
    age_eq,
    build_filter,
    conjoin,
    present,
    search_conditions,
    search_filter,
    username_eq,
)

__all__ = [
    "DtoBundle",
    "MemberQueryRepository",
    "age_eq",
    "build_filter",
    "conjoin",
    "present",
    "relationship_loaded",
    "search_conditions",
    "search_filter",
    "username_eq",
]
