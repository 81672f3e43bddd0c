from datetime import date

import pytest

from physfit.forms import (
    ResultForm,
    SportsmanForm,
    TrainingForm,
    format_date,
    parse_date,
)
from physfit.models import Category, Exercise, Result, Sportsman, Training


class _Dictionaries:
    def all_categories(self):
        return [Category("Junior", 4), Category("Senior", 9)]

    def all_exercises(self):
        return [Exercise("Jump", 2)]


def test_format_date_uses_day_month_year():
    assert format_date(date(2001, 2, 3)) == "03.02.2001"


def test_format_date_of_nothing_is_empty():
    assert format_date(None) == ""


@pytest.mark.parametrize("day", [date(1999, 12, 31), date(2024, 2, 29), date(2010, 1, 1)])
def test_parse_date_round_trip(day):
    assert parse_date(format_date(day)) == day


@pytest.mark.parametrize("text", ["", "garbage", "31.02.2020", "1.2.2020", "2020-01-02"])
def test_parse_date_rejects_invalid_text(text):
    assert parse_date(text) is None


def test_sportsman_form_round_trip_edits_same_object():
    sportsman = Sportsman("Ivanov", "Ivan", "Ivanovich", date(2001, 2, 3), "fast", 7)
    form = SportsmanForm.from_sportsman(sportsman)
    assert form.born_date == format_date(sportsman.born_date)
    form.name = "Petr"
    edited = form.to_sportsman()
    assert edited is sportsman
    assert edited.name == "Petr"
    assert edited.born_date == date(2001, 2, 3)
    assert edited.base_id == 7


def test_new_sportsman_form_creates_sportsman():
    form = SportsmanForm("Smith", "Anna", "", "bad date", "note")
    created = form.to_sportsman()
    assert created == Sportsman("Smith", "Anna", "", None, "note", 0)
    assert form.to_sportsman() is created


def test_training_form_defaults_to_today():
    form = TrainingForm()
    assert form.date == date.today()
    assert form.sportsman_id == 0


def test_training_form_round_trip():
    training = Training(date(2024, 5, 6), "Run", "easy", 3, 11)
    form = TrainingForm.from_training(training)
    assert form.sportsman_id == 3
    form.comments = "hard"
    edited = form.to_training()
    assert edited is training
    assert edited.comments == "hard"
    assert edited.base_id == 11


def test_new_training_form_keeps_sportsman():
    form = TrainingForm(date=date(2020, 1, 2), name="Swim", sportsman_id=5)
    created = form.to_training()
    assert created.sportsman_id == 5
    assert created.date == date(2020, 1, 2)
    assert created.base_id == 0


def test_result_form_choices_start_with_empty_choice():
    form = ResultForm()
    form.load_choices(_Dictionaries())
    assert form.category_choices == [("-", 0), ("Junior", 4), ("Senior", 9)]
    assert form.exercise_choices == [("-", 0), ("Jump", 2)]


def test_result_form_builds_result_from_choices():
    form = ResultForm(result="5.2", status="3", training_id=8)
    form.load_choices(_Dictionaries())
    form.category_index = 2
    form.exercise_index = 1
    created = form.to_result()
    assert created == Result(9, 2, "5.2", 3, 8, "", 0)


def test_result_form_without_choice_gives_zero_ids():
    created = ResultForm(status="not a number").to_result()
    assert (created.category, created.exercise, created.status) == (0, 0, 0)


def test_result_form_edits_existing_record():
    record = Result(1, 1, "old", 0, 2, "Jump", 5)
    form = ResultForm(result="new", status=" 4 ", record=record)
    assert form.to_result() is record
    assert record.result == "new"
    assert record.status == 4
    assert record.base_id == 5