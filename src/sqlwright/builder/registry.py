"""Statement builder registry with plugin discovery via entry points.

Built-in builders are always available. Third-party packages can add
dialects by registering a builder class in the 'sqlwright.dialects'
entry point group; the class is instantiated with a DbConfig.
"""

from importlib.metadata import entry_points
from typing import Any, Callable, Dict, List, Optional

from sqlwright.builder.base import QueryBuilder
from sqlwright.builder.mysql import MySQLQueryBuilder
from sqlwright.errors import DialectError
from sqlwright.utils.config import DbConfig

BuilderFactory = Callable[[Optional[DbConfig]], Any]

BUILTIN_BUILDERS: Dict[str, BuilderFactory] = {
    QueryBuilder.name: QueryBuilder,
    MySQLQueryBuilder.name: MySQLQueryBuilder,
}

# Cache for discovered builders
_builder_cache: Dict[str, BuilderFactory] = {}
_discovery_done: bool = False


def _discover_builders() -> None:
    """Discover builders from entry points.

    Uses importlib.metadata to find all registered builders
    in the 'sqlwright.dialects' entry point group.
    """
    global _discovery_done, _builder_cache

    if _discovery_done:
        return

    _builder_cache.update(BUILTIN_BUILDERS)

    for ep in entry_points(group="sqlwright.dialects"):
        if ep.name in _builder_cache:
            continue
        try:
            builder_class = ep.load()
        except Exception:
            # Skip builders that fail to load
            # This allows graceful handling of missing optional dependencies
            continue
        if isinstance(builder_class, type):
            _builder_cache[ep.name] = builder_class

    _discovery_done = True


def get_builder(name: str, config: Optional[DbConfig] = None) -> Any:
    """Get a statement builder instance by dialect name.

    Args:
        name: The name of the dialect (e.g., "mysql", "generic").
        config: Database configuration passed to the builder.

    Returns:
        A new builder instance.

    Raises:
        DialectError: If the dialect is not found.

    Example:
        >>> builder = get_builder("mysql", DbConfig(charset="utf8mb4"))
        >>> builder.drop_table_if_exists("widgets")
        'DROP TABLE IF EXISTS `widgets`'
    """
    _discover_builders()

    if name not in _builder_cache:
        available = ", ".join(sorted(_builder_cache.keys()))
        raise DialectError(
            f"Unknown dialect '{name}'. Available dialects: {available or 'none'}."
        )

    return _builder_cache[name](config)


def list_builders() -> List[str]:
    """List all available dialect names.

    Returns:
        A sorted list of available dialect names.
    """
    _discover_builders()
    return sorted(_builder_cache.keys())


def register_builder(name: str, builder_class: BuilderFactory) -> None:
    """Register a builder programmatically.

    This is primarily useful for testing or for registering builders
    that aren't installed via entry points.

    Args:
        name: The dialect name to register the builder under.
        builder_class: A class accepting an optional DbConfig.

    Raises:
        ValueError: If builder_class is not a class.
    """
    if not isinstance(builder_class, type):
        raise ValueError(f"{builder_class} must be a builder class")

    _discover_builders()
    _builder_cache[name] = builder_class


def clear_registry() -> None:
    """Clear the builder registry.

    This is primarily useful for testing.
    """
    global _discovery_done, _builder_cache
    _builder_cache.clear()
    _discovery_done = False
