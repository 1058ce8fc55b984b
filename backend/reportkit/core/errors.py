"""
errors.py — Exception hierarchy for reportkit.

Calendar and tagging functions fail immediately with one of these. Failures
raised by collaborators (missing files, driver errors) are not wrapped.
"""

from typing import Iterable


class ReportkitError(Exception):
    """Base class for all reportkit errors."""
    pass


class InvalidInput(ReportkitError, ValueError):
    """
    Raised when a date, month, year or quarter label cannot be interpreted.

    Attributes:
        value: The offending input
        expected: Human-readable list of the accepted shapes
    """

    def __init__(self, value, expected: Iterable[str]):
        self.value = value
        self.expected = list(expected)
        super().__init__(
            f"Cannot interpret {value!r}; expected one of: {', '.join(self.expected)}"
        )


class InvalidFormat(InvalidInput):
    """Raised when a quarter label matches neither FY17Q1 nor Q1FY17."""
    pass


class MissingRequiredField(ReportkitError, KeyError):
    """Raised when records lack fields the tagging engine requires."""

    def __init__(self, fields: Iterable[str], count: int):
        self.fields = list(fields)
        self.count = count
        super().__init__(
            f"{count} record(s) missing required field(s): {', '.join(self.fields)}"
        )

    def __str__(self) -> str:
        # KeyError.__str__ would quote the message
        return self.args[0]


class UnresolvedCategory(ReportkitError, ValueError):
    """Raised when a category cannot be resolved to a rank or no default is configured."""
    pass


class InvalidRule(ReportkitError, ValueError):
    """Raised for a malformed KeywordRule or a rule pointing at an unknown field."""
    pass


class TemplateVariableError(ReportkitError, KeyError):
    """Raised when a SQL template references a variable that was not supplied."""

    def __init__(self, script: str, variable: str):
        self.script = script
        self.variable = variable
        super().__init__(f"SQL script {script!r} references undefined variable ${{{variable}}}")

    def __str__(self) -> str:
        return self.args[0]
