"""pluggy hook specifications for directive plugins.

Packages providing their own directives implement these hooks so the
directives can be created by name.

Usage (implementing a plugin):
    from smart_table.directives.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl
        def smart_table_get_directives(self):
            return [HighlightDirective]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

import pluggy

PROJECT_NAME = "smart_table"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class SmartTableDirectiveSpec:
    """Hook specifications for directive plugins."""

    @hookspec
    def smart_table_get_directives(self) -> list[type]:  # type: ignore[empty-body]
        """Return directive classes.

        Each class declares a ``name`` class attribute and is constructed as
        ``cls(table, **params)``.
        """
