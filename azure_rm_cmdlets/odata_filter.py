"""
OData-style filter construction for Azure listing APIs.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple


class JobState(Enum):
    """Data Lake Analytics job states as the job service spells them."""

    ACCEPTED = "Accepted"
    COMPILING = "Compiling"
    ENDED = "Ended"
    NEW = "New"
    QUEUED = "Queued"
    RUNNING = "Running"
    SCHEDULING = "Scheduling"
    STARTING = "Starting"
    PAUSED = "Paused"
    WAITING_FOR_CAPACITY = "WaitingForCapacity"
    YIELDED = "Yielded"
    FINALIZING = "Finalizing"


class JobResult(Enum):
    """Data Lake Analytics job results."""

    NONE = "None"
    SUCCEEDED = "Succeeded"
    CANCELLED = "Cancelled"
    FAILED = "Failed"


class ODataFilter:
    """Builders for OData filter expressions (eq/ge/lt joined with and/or)."""

    AND = " and "
    OR = " or "

    @staticmethod
    def format_datetimeoffset(value: datetime) -> str:
        """
        Render a timestamp in round-trip form with seven fractional digits.

        Naive datetimes are treated as UTC.

        Args:
            value: Timestamp to render

        Returns:
            String such as "2024-01-01T00:00:00.0000000+00:00"
        """
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)

        # offsets are whole minutes on the wire
        offset_minutes = int(round(value.utcoffset().total_seconds() / 60))
        sign = "+" if offset_minutes >= 0 else "-"
        hours, minutes = divmod(abs(offset_minutes), 60)

        # microsecond precision padded to 100ns ticks
        return (
            f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
            f".{value.microsecond:06d}0"
            f"{sign}{hours:02d}:{minutes:02d}"
        )

    @staticmethod
    def literal(value, escape_quotes: bool = False) -> str:
        """
        Render a value as the text placed between single quotes.

        Enum members render as their value, everything else through str().

        Args:
            value: Value to render
            escape_quotes: Double embedded single quotes

        Returns:
            Literal text (without the surrounding quotes)
        """
        text = value.value if isinstance(value, Enum) else str(value)
        if escape_quotes:
            text = text.replace("'", "''")
        return text

    @staticmethod
    def eq_clause(field: str, value, escape_quotes: bool = False) -> str:
        """Build "<field> eq '<value>'"."""
        return f"{field} eq '{ODataFilter.literal(value, escape_quotes)}'"

    @staticmethod
    def datetime_clause(field: str, operator: str, value: datetime) -> str:
        """Build "<field> <operator> datetimeoffset'<timestamp>'"."""
        return f"{field} {operator} datetimeoffset'{ODataFilter.format_datetimeoffset(value)}'"

    @staticmethod
    def any_of_clause(
        field: str, values: Iterable, escape_quotes: bool = False
    ) -> Optional[str]:
        """
        Build a parenthesized or-disjunction of equality predicates.

        Args:
            field: Field name
            values: Values in the order they should appear

        Returns:
            "(<field> eq 'a' or <field> eq 'b')", or None for no values
        """
        predicates = [
            ODataFilter.eq_clause(field, value, escape_quotes) for value in values
        ]
        if not predicates:
            return None
        return "(" + ODataFilter.OR.join(predicates) + ")"

    @staticmethod
    def join_and(clauses: Sequence[str]) -> Optional[str]:
        """
        Join clauses into a conjunction.

        Returns:
            The joined expression, or None when there are no clauses
        """
        if not clauses:
            return None
        return ODataFilter.AND.join(clauses)

    @staticmethod
    def build_job_filter(
        submitter: Optional[str] = None,
        submitted_after: Optional[datetime] = None,
        submitted_before: Optional[datetime] = None,
        name: Optional[str] = None,
        states: Optional[Iterable[JobState]] = None,
        results: Optional[Iterable[JobResult]] = None,
        escape_quotes: bool = False,
    ) -> Optional[str]:
        """
        Build the job listing filter from optional parameters.

        Clauses always appear in the order submitter, submitted after,
        submitted before, name, states, results. Empty strings and empty
        collections (including exhausted iterators) count as absent.

        Args:
            submitter: Only jobs submitted by this user
            submitted_after: Only jobs submitted at or after this time
            submitted_before: Only jobs submitted before this time
            name: Only jobs with this friendly name
            states: Only jobs in one of these states
            results: Only jobs with one of these results
            escape_quotes: Double single quotes inside submitter and name.
                Off by default, which keeps the service's historical behaviour
                of passing values through untouched.

        Returns:
            Filter string, or None when no parameter is present
        """
        rules: List[Tuple[bool, Callable[[], Optional[str]]]] = [
            (
                bool(submitter),
                lambda: ODataFilter.eq_clause("submitter", submitter, escape_quotes),
            ),
            (
                submitted_after is not None,
                lambda: ODataFilter.datetime_clause("submitTime", "ge", submitted_after),
            ),
            (
                submitted_before is not None,
                lambda: ODataFilter.datetime_clause("submitTime", "lt", submitted_before),
            ),
            (
                bool(name),
                lambda: ODataFilter.eq_clause("name", name, escape_quotes),
            ),
            (
                bool(states),
                lambda: ODataFilter.any_of_clause("state", states),
            ),
            (
                bool(results),
                lambda: ODataFilter.any_of_clause("result", results),
            ),
        ]

        # any_of_clause yields None for an exhausted iterator
        rendered = (render() for present, render in rules if present)
        return ODataFilter.join_and([clause for clause in rendered if clause is not None])


build_job_filter = ODataFilter.build_job_filter
