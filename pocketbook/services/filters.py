"""Query-parameter filters for transaction listings.

Both builders are pure: they take the raw query parameters of a request and
return a `RangeFilter` describing an inclusive interval, or raise a
`FilterError` whose `kind` names what was wrong with the input.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, time
from typing import Any

from sqlalchemy.sql.elements import ColumnElement

START_OF_DAY = time(0, 0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)
DAY_FORMAT = re.compile(r"\d{4}-\d{2}-\d{2}")


class FilterError(ValueError):
    """Raised when query parameters cannot be turned into a filter."""

    kind = "InvalidFilter"


class InvalidQueryCombination(FilterError):
    kind = "InvalidQueryCombination"


class InvalidDateValue(FilterError):
    kind = "InvalidDateValue"


class InvalidAmountValue(FilterError):
    kind = "InvalidAmountValue"


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive interval; a missing bound leaves that side open."""

    lower: Any = None
    upper: Any = None

    @property
    def is_empty(self) -> bool:
        return self.lower is None and self.upper is None

    def clauses(self, column) -> list[ColumnElement]:
        """Render the interval as SQLAlchemy conditions on `column`."""
        conditions = []
        if self.lower is not None:
            conditions.append(column >= self.lower)
        if self.upper is not None:
            conditions.append(column <= self.upper)
        return conditions


def _present(params: Mapping[str, str], name: str) -> str | None:
    value = params.get(name)
    if value is None or value == "":
        return None
    return value


def _parse_day(value: str, bound: time) -> datetime:
    if not DAY_FORMAT.fullmatch(value):
        raise InvalidDateValue(f"Invalid date value: {value!r}")
    try:
        day = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateValue(f"Invalid date value: {value!r}") from e
    return datetime.combine(day, bound, tzinfo=UTC)


def _parse_amount(value: str) -> float:
    try:
        amount = float(value)
    except ValueError as e:
        raise InvalidAmountValue(f"Invalid amount value: {value!r}") from e
    if not math.isfinite(amount):
        raise InvalidAmountValue(f"Invalid amount value: {value!r}")
    return amount


def build_date_filter(params: Mapping[str, str]) -> RangeFilter:
    """Build a date interval from `date`, `from` and `upTo`.

    `date` selects a single UTC day and cannot be combined with the other two.
    `from` starts at 00:00:00.000 and `upTo` ends at 23:59:59.999 of the given day.
    """
    date = _present(params, "date")
    start = _present(params, "from")
    end = _present(params, "upTo")

    if date is not None:
        if start is not None or end is not None:
            raise InvalidQueryCombination("`date` cannot be combined with `from` or `upTo`")
        return RangeFilter(_parse_day(date, START_OF_DAY), _parse_day(date, END_OF_DAY))

    return RangeFilter(
        lower=_parse_day(start, START_OF_DAY) if start is not None else None,
        upper=_parse_day(end, END_OF_DAY) if end is not None else None,
    )


def build_amount_filter(params: Mapping[str, str]) -> RangeFilter:
    """Build an inclusive amount interval from `min` and `max`."""
    low = _present(params, "min")
    high = _present(params, "max")

    return RangeFilter(
        lower=_parse_amount(low) if low is not None else None,
        upper=_parse_amount(high) if high is not None else None,
    )
