"""Storage of the fitness journal in an SQL database."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

import pymysql

from physfit.models import Category, Exercise, Result, Sportsman, Training

log = logging.getLogger(__name__)

DEFAULT_PORT = 3306
DEFAULT_DATABASE = "corusant"
DEFAULT_USER = "ordo"
PASSWORD = "password"

_PLACEHOLDER = re.compile(r":(\w+)")
_PARAMSTYLES = ("named", "pyformat", "qmark", "format")


class DatabaseError(Exception):
    """A query or connection failed."""


@dataclass
class _Outcome:
    rows: list = field(default_factory=list)
    last_id: int = 0


def _to_int(value: Any) -> int:
    return 0 if value is None else int(value)


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


def _to_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _bindable(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value


class Database:
    """Reads and writes sportsmen, categories, exercises, trainings and results.

    ``connect`` is called for every query and must return a DB-API
    connection; ``paramstyle`` is that driver's parameter style.
    """

    def __init__(self, connect: Callable[[], Any], paramstyle: str = "named"):
        if paramstyle not in _PARAMSTYLES:
            raise ValueError(f"unsupported parameter style: {paramstyle!r}")
        self._connect = connect
        self._paramstyle = paramstyle
        self._last_error = ""

    @classmethod
    def mysql(
        cls,
        host: str,
        port: int = DEFAULT_PORT,
        database: str = DEFAULT_DATABASE,
        user: str = DEFAULT_USER,
        password: str = PASSWORD,
    ) -> "Database":
        """Open a MySQL database, raising DatabaseError if it cannot be reached."""

        def connect():
            return pymysql.connect(
                host=host,
                port=port,
                database=database,
                user=user,
                password=password,
                charset="utf8mb4",
            )

        db = cls(connect, "pyformat")
        try:
            connection = connect()
        except pymysql.MySQLError as exc:
            db._last_error = str(exc)
            log.debug("%s", exc)
            raise DatabaseError(str(exc)) from exc
        connection.close()
        return db

    @property
    def last_error(self) -> str:
        """Text of the most recent failure, or an empty string."""
        return self._last_error

    def _prepare(self, query: str, values: Mapping[str, Any]):
        if self._paramstyle == "named":
            return query, dict(values)
        if self._paramstyle == "pyformat":
            return _PLACEHOLDER.sub(r"%(\1)s", query), dict(values)
        names = _PLACEHOLDER.findall(query)
        marker = "?" if self._paramstyle == "qmark" else "%s"
        return _PLACEHOLDER.sub(marker, query), tuple(values[name] for name in names)

    def _execute(self, query: str, values: Optional[Mapping[str, Any]] = None) -> _Outcome:
        bound = {key: _bindable(value) for key, value in (values or {}).items()}
        try:
            sql, params = self._prepare(query, bound)
            with closing(self._connect()) as connection:
                cursor = connection.cursor()
                try:
                    cursor.execute(sql, params)
                    rows = []
                    if cursor.description:
                        names = [column[0] for column in cursor.description]
                        rows = [dict(zip(names, row)) for row in cursor.fetchall()]
                    last_id = cursor.lastrowid or 0
                finally:
                    cursor.close()
                connection.commit()
        except KeyError as exc:
            self._last_error = f"no value bound for parameter {exc.args[0]}"
            raise DatabaseError(self._last_error) from exc
        except Exception as exc:
            self._last_error = str(exc)
            log.debug("%s", exc)
            raise DatabaseError(str(exc)) from exc
        return _Outcome(rows, _to_int(last_id))

    # Sportsmen

    def all_sportsmen(self) -> list[Sportsman]:
        outcome = self._execute(
            "SELECT id, surname, `name`, midllename, born_date, comments "
            "FROM PhysFit_sportsmens"
        )
        return [
            Sportsman(
                _to_str(row["surname"]),
                _to_str(row["name"]),
                _to_str(row["midllename"]),
                _to_date(row["born_date"]),
                _to_str(row["comments"]),
                _to_int(row["id"]),
            )
            for row in outcome.rows
        ]

    def add_sportsman(self, sportsman: Sportsman) -> int:
        outcome = self._execute(
            "INSERT INTO `PhysFit_sportsmens` "
            "(`surname`, `name`, `midllename`, `born_date`, `comments`) "
            "VALUES (:surname, :name, :midllename, :date, :comments)",
            {
                "surname": sportsman.surname,
                "name": sportsman.name,
                "midllename": sportsman.middle_name,
                "date": sportsman.born_date,
                "comments": sportsman.comments,
            },
        )
        sportsman.base_id = outcome.last_id
        return outcome.last_id

    def edit_sportsman(self, sportsman: Sportsman) -> None:
        self._execute(
            "UPDATE `PhysFit_sportsmens` "
            "SET `surname` = :surname, `name` = :name, `midllename` = :midllename, "
            "`born_date` = :born_date, `comments` = :comments "
            "WHERE id = :id",
            {
                "id": sportsman.base_id,
                "surname": sportsman.surname,
                "name": sportsman.name,
                "midllename": sportsman.middle_name,
                "born_date": sportsman.born_date,
                "comments": sportsman.comments,
            },
        )

    def delete_sportsman(self, sportsman: Sportsman) -> None:
        self._execute(
            "DELETE FROM `PhysFit_sportsmens` WHERE id = :id", {"id": sportsman.base_id}
        )

    # Categories

    def all_categories(self) -> list[Category]:
        outcome = self._execute("SELECT id, name FROM PhysFit_category")
        return [Category(_to_str(row["name"]), _to_int(row["id"])) for row in outcome.rows]

    def add_category(self, category: Category) -> int:
        outcome = self._execute(
            "INSERT INTO `PhysFit_category`(`name`) VALUES (:name)", {"name": category.name}
        )
        category.base_id = outcome.last_id
        return outcome.last_id

    def edit_category(self, category: Category) -> None:
        self._execute(
            "UPDATE `PhysFit_category` SET `name` = :name WHERE id = :id",
            {"id": category.base_id, "name": category.name},
        )

    def delete_category(self, category: Category) -> None:
        self._execute(
            "DELETE FROM `PhysFit_category` WHERE id = :id", {"id": category.base_id}
        )

    # Exercises

    def all_exercises(self) -> list[Exercise]:
        outcome = self._execute("SELECT id, name FROM PhysFit_exercise")
        return [Exercise(_to_str(row["name"]), _to_int(row["id"])) for row in outcome.rows]

    def add_exercise(self, exercise: Exercise) -> int:
        outcome = self._execute(
            "INSERT INTO `PhysFit_exercise`(`name`) VALUES (:name)", {"name": exercise.name}
        )
        exercise.base_id = outcome.last_id
        return outcome.last_id

    def edit_exercise(self, exercise: Exercise) -> None:
        self._execute(
            "UPDATE `PhysFit_exercise` SET `name` = :name WHERE id = :id",
            {"id": exercise.base_id, "name": exercise.name},
        )

    def delete_exercise(self, exercise: Exercise) -> None:
        self._execute(
            "DELETE FROM `PhysFit_exercise` WHERE id = :id", {"id": exercise.base_id}
        )

    # Trainings

    def trainings(self, sportsman_id: int) -> list[Training]:
        outcome = self._execute(
            "SELECT id, `date`, `name`, comments, sportsmen "
            "FROM PhysFit_trainings "
            "WHERE sportsmen = :sportsmen ",
            {"sportsmen": sportsman_id},
        )
        return [
            Training(
                _to_date(row["date"]),
                _to_str(row["name"]),
                _to_str(row["comments"]),
                _to_int(row["sportsmen"]),
                _to_int(row["id"]),
            )
            for row in outcome.rows
        ]

    def add_training(self, training: Training) -> int:
        outcome = self._execute(
            "INSERT INTO `PhysFit_trainings` "
            "(`date`, `name`, `comments`, `sportsmen`) "
            "VALUES (:date, :name, :comments, :sportsmen)",
            {
                "date": training.date,
                "name": training.name,
                "comments": training.comments,
                "sportsmen": training.sportsman_id,
            },
        )
        training.base_id = outcome.last_id
        return outcome.last_id

    def edit_training(self, training: Training) -> None:
        self._execute(
            "UPDATE `PhysFit_trainings` "
            "SET `date` = :date, `name` = :name, `comments` = :comments "
            "WHERE id = :id",
            {
                "id": training.base_id,
                "date": training.date,
                "name": training.name,
                "comments": training.comments,
            },
        )

    def delete_training(self, training: Training) -> None:
        self._execute(
            "DELETE FROM `PhysFit_trainings` WHERE id = :id", {"id": training.base_id}
        )

    # Results

    def results(self, training_id: int) -> list[Result]:
        outcome = self._execute(
            "SELECT R.id, R.category, R.exercise, R.result, R.`status`, "
            "E.`name` as eName, R.training "
            "FROM PhysFit_results R "
            "INNER JOIN PhysFit_exercise E ON E.id = R.exercise "
            "WHERE R.training = :training ",
            {"training": training_id},
        )
        return [
            Result(
                _to_int(row["category"]),
                _to_int(row["exercise"]),
                _to_str(row["result"]),
                _to_int(row["status"]),
                _to_int(row["training"]),
                _to_str(row["eName"]),
                _to_int(row["id"]),
            )
            for row in outcome.rows
        ]

    def add_result(self, result: Result) -> int:
        outcome = self._execute(
            "INSERT INTO `PhysFit_results` "
            "(category, exercise, result, status, training) "
            "VALUES (:category, :exercise, :result, :status, :training)",
            {
                "category": result.category,
                "exercise": result.exercise,
                "result": result.result,
                "status": result.status,
                "training": result.training_id,
            },
        )
        result.base_id = outcome.last_id
        return outcome.last_id

    def edit_result(self, result: Result) -> None:
        self._execute(
            "UPDATE `PhysFit_results` "
            "SET category = :category, exercise = :exercise, result = :result, "
            "status = :status "
            "WHERE id = :id",
            {
                "id": result.base_id,
                "category": result.category,
                "exercise": result.exercise,
                "result": result.result,
                "status": result.status,
            },
        )

    def delete_result(self, result: Result) -> None:
        self._execute(
            "DELETE FROM `PhysFit_results` WHERE id = :id", {"id": result.base_id}
        )