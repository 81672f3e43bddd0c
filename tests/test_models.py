from datetime import date

from physfit.models import Category, Exercise, Result, Sportsman, Training


def test_category_defaults_and_values():
    category = Category("Juniors")
    assert category.name == "Juniors"
    assert category.base_id == 0
    assert Category("Seniors", 7).base_id == 7


def test_exercise_holds_name_and_id():
    exercise = Exercise("Squat", 3)
    assert (exercise.name, exercise.base_id) == ("Squat", 3)
    exercise.base_id = 11
    assert exercise.base_id == 11


def test_sportsman_full_name_joins_parts():
    sportsman = Sportsman("Ivanov", "Ivan", "Ivanovich", date(2000, 1, 2), "note")
    assert sportsman.full_name() == "Ivanov Ivan Ivanovich"
    assert sportsman.base_id == 0


def test_sportsman_full_name_keeps_spaces_for_missing_parts():
    assert Sportsman("Petrov", "Petr").full_name() == "Petrov Petr "


def test_training_label_uses_day_month_year():
    training = Training(date(2021, 3, 5), "Run", "", 4)
    assert training.label() == "05.03.2021: Run"
    assert training.sportsman_id == 4


def test_training_label_without_date():
    assert Training(None, "Swim").label() == ": Swim"


def test_result_label():
    result = Result(1, 2, "10s", 2, 5, "Run", 9)
    assert result.label() == "Run: 10s, состояние: 2"
    assert (result.training_id, result.base_id) == (5, 9)


def test_records_compare_by_value():
    assert Exercise("Squat", 1) == Exercise("Squat", 1)
    assert Category("A", 1) != Category("A", 2)