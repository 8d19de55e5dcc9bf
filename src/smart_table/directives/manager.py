"""Directive registry.

Uses pluggy for hook-based registration, so third-party packages can add
directives next to the builtin ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

from smart_table.contracts.errors import DuplicateDirectiveError, UnknownDirectiveError
from smart_table.directives.hookspecs import PROJECT_NAME, SmartTableDirectiveSpec, hookimpl

if TYPE_CHECKING:
    from smart_table.engine.table import SmartTable


class _BuiltinDirectives:
    """Hook implementation providing the directives shipped with smart-table."""

    @hookimpl
    def smart_table_get_directives(self) -> list[type]:
        from smart_table.directives.filter import FilterDirective
        from smart_table.directives.pagination import PaginationDirective
        from smart_table.directives.search import SearchDirective
        from smart_table.directives.sort import SortDirective
        from smart_table.directives.summary import SummaryDirective, WorkingIndicatorDirective

        return [
            SortDirective,
            FilterDirective,
            SearchDirective,
            PaginationDirective,
            SummaryDirective,
            WorkingIndicatorDirective,
        ]


class DirectiveManager:
    """Manages directive registration and lookup.

    Usage:
        manager = DirectiveManager()
        manager.register_builtin_directives()

        pagination = manager.create("pagination", table)
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SmartTableDirectiveSpec)
        self._directives: dict[str, type] = {}

    def register_builtin_directives(self) -> None:
        self.register(_BuiltinDirectives())

    def register(self, plugin: Any) -> None:
        """Register a plugin implementing ``smart_table_get_directives``.

        Raises:
            DuplicateDirectiveError: If two registered plugins share a directive name
        """
        self._pm.register(plugin)
        try:
            self._refresh_cache()
        except DuplicateDirectiveError:
            self._pm.unregister(plugin)
            raise

    def _refresh_cache(self) -> None:
        directives: dict[str, type] = {}
        for provided in self._pm.hook.smart_table_get_directives():
            for cls in provided:
                name = cls.name
                if name in directives:
                    raise DuplicateDirectiveError(
                        f"Duplicate directive name: '{name}'. Already registered by {directives[name].__name__}"
                    )
                directives[name] = cls
        self._directives = directives

    def get_directives(self) -> list[type]:
        return list(self._directives.values())

    def get_directive_by_name(self, name: str) -> type:
        """Look up a directive class.

        Raises:
            UnknownDirectiveError: If no registered directive has that name
        """
        if name not in self._directives:
            raise UnknownDirectiveError(name, list(self._directives))
        return self._directives[name]

    def create(self, name: str, table: SmartTable, **params: Any) -> Any:
        """Instantiate the directive registered as ``name`` for ``table``."""
        return self.get_directive_by_name(name)(table, **params)
