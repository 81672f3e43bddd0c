"""Editable forms for sportsmen, trainings and results."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Protocol

from physfit.models import DATE_FORMAT, Category, Exercise, Result, Sportsman, Training

EMPTY_CHOICE = ("-", 0)

_DATE_SHAPE = re.compile(r"\d{2}\.\d{2}\.\d{4}")
_INTEGER = re.compile(r"[+-]?\d+")


class _Dictionaries(Protocol):
    def all_categories(self) -> list[Category]: ...

    def all_exercises(self) -> list[Exercise]: ...


def format_date(value: Optional[date]) -> str:
    """Render a date as dd.mm.yyyy, or an empty string for no date."""
    return "" if value is None else value.strftime(DATE_FORMAT)


def parse_date(text: str) -> Optional[date]:
    """Read a dd.mm.yyyy date; None when the text is not a valid date."""
    if not _DATE_SHAPE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def _text_to_int(text: str) -> int:
    stripped = text.strip()
    return int(stripped) if _INTEGER.fullmatch(stripped) else 0


@dataclass
class SportsmanForm:
    """The fields of the sportsman dialog; the date is kept as typed."""

    surname: str = ""
    name: str = ""
    middle_name: str = ""
    born_date: str = ""
    comments: str = ""
    sportsman: Optional[Sportsman] = None

    @classmethod
    def from_sportsman(cls, sportsman: Sportsman) -> "SportsmanForm":
        """A form filled with the sportsman's data that edits that sportsman."""
        return cls(
            surname=sportsman.surname,
            name=sportsman.name,
            middle_name=sportsman.middle_name,
            born_date=format_date(sportsman.born_date),
            comments=sportsman.comments,
            sportsman=sportsman,
        )

    def to_sportsman(self) -> Sportsman:
        """Write the fields into the edited sportsman, creating one if needed."""
        if self.sportsman is None:
            self.sportsman = Sportsman()
        target = self.sportsman
        target.surname = self.surname
        target.name = self.name
        target.middle_name = self.middle_name
        target.born_date = parse_date(self.born_date)
        target.comments = self.comments
        return target


@dataclass
class TrainingForm:
    """The fields of the training dialog."""

    date: Optional[date] = field(default_factory=date.today)
    name: str = ""
    comments: str = ""
    sportsman_id: int = 0
    training: Optional[Training] = None

    @classmethod
    def from_training(cls, training: Training) -> "TrainingForm":
        """A form filled with the training's data that edits that training."""
        return cls(
            date=training.date,
            name=training.name,
            comments=training.comments,
            sportsman_id=training.sportsman_id,
            training=training,
        )

    def to_training(self) -> Training:
        """Write the fields into the edited training, creating one if needed."""
        if self.training is None:
            self.training = Training()
        target = self.training
        target.date = self.date
        target.name = self.name
        target.comments = self.comments
        target.sportsman_id = self.sportsman_id
        return target


@dataclass
class ResultForm:
    """The fields of the result dialog.

    Categories and exercises are offered as (label, id) choices whose first
    entry is an empty choice with id 0.
    """

    result: str = ""
    status: str = ""
    category_index: int = 0
    exercise_index: int = 0
    training_id: int = 0
    category_choices: list[tuple[str, int]] = field(default_factory=lambda: [EMPTY_CHOICE])
    exercise_choices: list[tuple[str, int]] = field(default_factory=lambda: [EMPTY_CHOICE])
    record: Optional[Result] = None

    def load_choices(self, database: _Dictionaries) -> None:
        """Fill the category and exercise choices from the database."""
        self.category_choices = [EMPTY_CHOICE] + [
            (category.name, category.base_id) for category in database.all_categories()
        ]
        self.exercise_choices = [EMPTY_CHOICE] + [
            (exercise.name, exercise.base_id) for exercise in database.all_exercises()
        ]
        self.category_index = 0
        self.exercise_index = 0

    def to_result(self) -> Result:
        """Write the fields into the edited result, creating one if needed."""
        if self.record is None:
            self.record = Result()
        target = self.record
        target.category = self.category_choices[self.category_index][1]
        target.exercise = self.exercise_choices[self.exercise_index][1]
        target.result = self.result
        target.status = _text_to_int(self.status)
        target.training_id = self.training_id
        return target