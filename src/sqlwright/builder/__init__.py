"""Dialect-specific SQL statement builders.

Example:
    >>> from sqlwright.builder import get_builder
    >>> builder = get_builder("mysql")
    >>> builder.delete_duplicates("users", ["email"])
    'DELETE `a` FROM `users` `a` INNER JOIN `users` `b` WHERE `a`.`id` > `b`.`id` AND `a`.`email` = `b`.`email`'
"""

from sqlwright.builder.base import GENERIC_TYPE_MAP, QueryBuilder
from sqlwright.builder.mysql import MYSQL_TYPE_MAP, MySQLQueryBuilder
from sqlwright.builder.registry import (
    clear_registry,
    get_builder,
    list_builders,
    register_builder,
)

__all__ = [
    # Builders
    "QueryBuilder",
    "MySQLQueryBuilder",
    "GENERIC_TYPE_MAP",
    "MYSQL_TYPE_MAP",
    # Registry functions
    "get_builder",
    "list_builders",
    "register_builder",
    "clear_registry",
]
