"""Interface for reading the current time."""

import abc
from datetime import datetime

# pylint: disable=too-few-public-methods


class Clock(abc.ABC):
    """Contract for a source of timezone-aware UTC timestamps."""

    @abc.abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
