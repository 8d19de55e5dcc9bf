"""Exception types raised by smart-table.

Pipeline failures inside ``exec`` never escape as exceptions; they are
dispatched as ``EXEC_ERROR`` with the exception instance as payload. These
classes let listeners tell a malformed criteria apart from a broken record.
"""


class SmartTableError(Exception):
    """Base class for errors raised by smart-table itself."""


class UnknownOperatorError(SmartTableError, ValueError):
    """Raised when a filter clause names an operator that does not exist.

    Attributes:
        operator: The operator string found in the clause
    """

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Unknown filter operator: {operator!r}")


class InvalidSearchFlagsError(SmartTableError, ValueError):
    """Raised when search criteria carry regular expression flags Python cannot honour."""

    def __init__(self, flags: str, unsupported: str) -> None:
        self.flags = flags
        self.unsupported = unsupported
        super().__init__(f"Unsupported search flag(s) {unsupported!r} in {flags!r}")


class UnknownDirectiveError(SmartTableError, KeyError):
    """Raised when the directive registry has no directive under a name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown directive: {name!r}. Available: {', '.join(sorted(available))}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class DuplicateDirectiveError(SmartTableError, ValueError):
    """Raised when two registered plugins provide a directive with the same name."""
