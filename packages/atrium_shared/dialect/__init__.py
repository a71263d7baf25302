"""Backend dialect classification and dialect-specific predicate text."""

from .interfaces import DataSource
from .kinds import DialectKind
from .predicates import (
    MembershipPredicateBuilder,
    build_membership_predicate,
    membership_clause,
)
from .resolver import DialectResolver

__all__ = [
    "DataSource",
    "DialectKind",
    "DialectResolver",
    "MembershipPredicateBuilder",
    "build_membership_predicate",
    "membership_clause",
]
