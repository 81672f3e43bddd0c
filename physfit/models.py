"""Records kept by the physical fitness journal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

DATE_FORMAT = "%d.%m.%Y"


def _display_date(value: Optional[date]) -> str:
    return value.strftime(DATE_FORMAT) if value is not None else ""


@dataclass
class Category:
    """A competition or age category."""

    name: str = ""
    base_id: int = 0


@dataclass
class Exercise:
    """An exercise that results are recorded for."""

    name: str = ""
    base_id: int = 0


@dataclass
class Sportsman:
    """A person whose trainings are tracked."""

    surname: str = ""
    name: str = ""
    middle_name: str = ""
    born_date: Optional[date] = None
    comments: str = ""
    base_id: int = 0

    def full_name(self) -> str:
        """Surname, name and middle name separated by spaces."""
        return f"{self.surname} {self.name} {self.middle_name}"


@dataclass
class Training:
    """One training session of a sportsman."""

    date: Optional[date] = None
    name: str = ""
    comments: str = ""
    sportsman_id: int = 0
    base_id: int = 0

    def label(self) -> str:
        """The session's date and name as shown in the trainings list."""
        return f"{_display_date(self.date)}: {self.name}"


@dataclass
class Result:
    """The outcome of one exercise within a training."""

    category: int = 0
    exercise: int = 0
    result: str = ""
    status: int = 0
    training_id: int = 0
    exercise_name: str = ""
    base_id: int = 0

    def label(self) -> str:
        """The result as shown in the results table."""
        return f"{self.exercise_name}: {self.result}, состояние: {self.status}"