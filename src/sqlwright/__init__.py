"""SQL Wright - dialect-specific DDL/DML statement generation."""

from sqlwright.builder import MySQLQueryBuilder, QueryBuilder, get_builder
from sqlwright.errors import (
    BuilderError,
    ConditionError,
    DialectError,
    UnsupportedOperationError,
)
from sqlwright.params import BoundStatement, ParameterBinder
from sqlwright.utils.config import DbConfig

__all__ = [
    "BoundStatement",
    "BuilderError",
    "ConditionError",
    "DbConfig",
    "DialectError",
    "MySQLQueryBuilder",
    "ParameterBinder",
    "QueryBuilder",
    "UnsupportedOperationError",
    "get_builder",
]
