"""Event kinds and criteria vocabularies shared by the engine and directives.

Values are the wire names used in table state dictionaries and event
dispatch, so a remote query receives exactly these strings.
"""

from enum import StrEnum


class TableEvent(StrEnum):
    """Every event a table can dispatch.

    The set is closed: directives subscribe to these members, never to
    free-form strings.
    """

    TOGGLE_SORT = "TOGGLE_SORT"
    DISPLAY_CHANGED = "DISPLAY_CHANGED"
    PAGE_CHANGED = "CHANGE_PAGE"
    EXEC_CHANGED = "EXEC_CHANGED"
    FILTER_CHANGED = "FILTER_CHANGED"
    SUMMARY_CHANGED = "SUMMARY_CHANGED"
    SEARCH_CHANGED = "SEARCH_CHANGED"
    EXEC_ERROR = "EXEC_ERROR"


class SortDirection(StrEnum):
    """Direction of the sort sub-tree."""

    ASC = "asc"
    DESC = "desc"
    NONE = "none"


class FilterOperator(StrEnum):
    """Operators accepted in a filter clause."""

    INCLUDES = "includes"
    IS = "is"
    IS_NOT = "isNot"
    LOWER_THAN = "lt"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    LOWER_THAN_OR_EQUAL = "lte"
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    ANY_OF = "anyOf"


class FilterType(StrEnum):
    """Coercion applied to both sides of a filter clause."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    STRING = "string"
