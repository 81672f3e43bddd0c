import sqlite3
from datetime import date

import pytest

from physfit.database import Database, DatabaseError
from physfit.models import Category, Exercise, Result, Sportsman, Training

SCHEMA = """
CREATE TABLE PhysFit_sportsmens (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    surname TEXT, name TEXT, midllename TEXT, born_date DATE, comments TEXT
);
CREATE TABLE PhysFit_category (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT);
CREATE TABLE PhysFit_exercise (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT);
CREATE TABLE PhysFit_trainings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date DATE, name TEXT, comments TEXT, sportsmen INTEGER
);
CREATE TABLE PhysFit_results (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category INTEGER, exercise INTEGER, result TEXT, status INTEGER, training INTEGER
);
"""


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "journal.db"
    with sqlite3.connect(path) as connection:
        connection.executescript(SCHEMA)
    return path


@pytest.fixture
def db(db_path):
    return Database(lambda: sqlite3.connect(db_path), "named")


class _FakeCursor:
    def __init__(self, log):
        self.log = log
        self.description = None
        self.lastrowid = 5

    def execute(self, sql, params):
        self.log.append((sql, params))

    def fetchall(self):
        return []

    def close(self):
        pass


class _FakeConnection:
    def __init__(self, log):
        self.log = log

    def cursor(self):
        return _FakeCursor(self.log)

    def commit(self):
        pass

    def close(self):
        pass


def test_sportsman_round_trip(db):
    sportsman = Sportsman("Ivanov", "Ivan", "Ivanovich", date(2001, 4, 9), "fast")
    new_id = db.add_sportsman(sportsman)
    assert sportsman.base_id == new_id
    assert db.all_sportsmen() == [sportsman]


def test_edit_and_delete_sportsman(db):
    sportsman = Sportsman("Ivanov", "Ivan", "", date(2001, 4, 9), "")
    db.add_sportsman(sportsman)
    sportsman.surname = "Petrov"
    sportsman.born_date = date(1999, 12, 31)
    db.edit_sportsman(sportsman)
    assert db.all_sportsmen() == [sportsman]
    db.delete_sportsman(sportsman)
    assert db.all_sportsmen() == []


def test_sportsman_without_birth_date(db):
    db.add_sportsman(Sportsman("Sidorov", "Sidor"))
    [loaded] = db.all_sportsmen()
    assert loaded.born_date is None


def test_category_crud(db):
    first = Category("Juniors")
    second = Category("Seniors")
    db.add_category(first)
    db.add_category(second)
    assert first.base_id != second.base_id
    first.name = "Youth"
    db.edit_category(first)
    assert db.all_categories() == [first, second]
    db.delete_category(second)
    assert db.all_categories() == [first]


def test_exercise_crud(db):
    exercise = Exercise("Squat")
    db.add_exercise(exercise)
    assert db.all_exercises() == [exercise]
    exercise.name = "Deadlift"
    db.edit_exercise(exercise)
    assert [e.name for e in db.all_exercises()] == ["Deadlift"]
    db.delete_exercise(exercise)
    assert db.all_exercises() == []


def test_trainings_are_filtered_by_sportsman(db):
    mine = Training(date(2022, 5, 1), "Morning", "easy", 1)
    other = Training(date(2022, 5, 2), "Evening", "", 2)
    db.add_training(mine)
    db.add_training(other)
    assert db.trainings(1) == [mine]
    assert db.trainings(2) == [other]


def test_edit_and_delete_training(db):
    training = Training(date(2022, 5, 1), "Morning", "", 1)
    db.add_training(training)
    training.name = "Noon"
    training.date = date(2022, 6, 1)
    db.edit_training(training)
    assert db.trainings(1) == [training]
    db.delete_training(training)
    assert db.trainings(1) == []


def test_results_carry_exercise_name(db):
    exercise = Exercise("Run")
    db.add_exercise(exercise)
    result = Result(3, exercise.base_id, "12.5", 2, 7)
    db.add_result(result)
    [loaded] = db.results(7)
    assert loaded.exercise_name == "Run"
    assert (loaded.result, loaded.status, loaded.base_id) == ("12.5", 2, result.base_id)
    assert db.results(8) == []


def test_edit_and_delete_result(db):
    exercise = Exercise("Run")
    db.add_exercise(exercise)
    result = Result(1, exercise.base_id, "10", 1, 4)
    db.add_result(result)
    result.result = "9"
    result.status = 3
    db.edit_result(result)
    [loaded] = db.results(4)
    assert (loaded.result, loaded.status) == ("9", 3)
    db.delete_result(loaded)
    assert db.results(4) == []


def test_failed_query_raises_and_records_error(tmp_path):
    db = Database(lambda: sqlite3.connect(tmp_path / "empty.db"), "named")
    assert db.last_error == ""
    with pytest.raises(DatabaseError):
        db.all_categories()
    assert "PhysFit_category" in db.last_error


def test_unknown_paramstyle_is_rejected():
    with pytest.raises(ValueError):
        Database(lambda: None, "numeric")


def test_pyformat_placeholders():
    log = []
    db = Database(lambda: _FakeConnection(log), "pyformat")
    assert db.add_category(Category("Squat")) == 5
    sql, params = log[0]
    assert "%(name)s" in sql
    assert params == {"name": "Squat"}


def test_qmark_placeholders_keep_order():
    log = []
    db = Database(lambda: _FakeConnection(log), "qmark")
    db.edit_category(Category("Squat", 8))
    sql, params = log[0]
    assert ":name" not in sql and sql.count("?") == 2
    assert params == ("Squat", 8)


def test_dates_are_bound_as_iso_text():
    log = []
    db = Database(lambda: _FakeConnection(log), "named")
    db.add_training(Training(date(2020, 2, 29), "Leap", "", 1))
    _, params = log[0]
    assert params["date"] == date(2020, 2, 29).isoformat()


def test_mysql_unreachable_server_raises():
    with pytest.raises(DatabaseError):
        Database.mysql("127.0.0.1", 1)