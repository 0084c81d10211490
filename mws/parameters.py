"""
Request parameters for MWS calls.

Every parameter flattens itself into one or more string key/value pairs. The
request merges those pairs into the mapping that gets signed and sent.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Iterable, Optional


class Parameter(ABC):
    """A request parameter that serializes to string pairs."""

    def __init__(self, key: str):
        self.key = key

    @abstractmethod
    def serialize(self) -> dict[str, str]:
        """Flatten the parameter into key/value pairs."""


class StringParameter(Parameter):
    """A single ``key=value`` pair."""

    def __init__(self, key: str, value: Any):
        super().__init__(key)
        self.value = value

    def serialize(self) -> dict[str, str]:
        return {self.key: str(self.value)}


def format_timestamp(value: datetime) -> str:
    """
    Render a datetime as ISO-8601 in UTC with milliseconds.

    Naive datetimes are taken to be UTC already.

    Example:
        >>> format_timestamp(datetime(2013, 9, 1, 12, 34, 56, 789000))
        '2013-09-01T12:34:56.789Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TimestampParameter(Parameter):
    """A datetime rendered as an ISO-8601 UTC string."""

    def __init__(self, key: str, value: datetime):
        super().__init__(key)
        self.value = value

    def serialize(self) -> dict[str, str]:
        return {self.key: format_timestamp(self.value)}


class ListParameter(Parameter):
    """
    An ordered list serialized as ``key.1``, ``key.2``, ...

    Values can be appended with ``push`` until the request is signed. An empty
    list produces no pairs at all.
    """

    def __init__(self, key: str, values: Optional[Iterable[Any]] = None):
        super().__init__(key)
        self.values: list[str] = [str(v) for v in values or []]

    def push(self, value: Any) -> None:
        self.values.append(str(value))

    def serialize(self) -> dict[str, str]:
        return {
            f"{self.key}.{index}": value
            for index, value in enumerate(self.values, start=1)
        }
