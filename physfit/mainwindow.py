"""The journal's main window and the operations behind it."""

from __future__ import annotations

import argparse
import os
import sys
import traceback
from dataclasses import replace
from typing import Any, Callable, Optional

from physfit.database import (
    DEFAULT_DATABASE,
    DEFAULT_PORT,
    DEFAULT_USER,
    PASSWORD,
    Database,
    DatabaseError,
)
from physfit.forms import ResultForm, SportsmanForm, TrainingForm, format_date, parse_date
from physfit.models import Category, Exercise, Result, Sportsman, Training

try:
    import tkinter as tk
    from tkinter import messagebox, simpledialog, ttk
except ImportError:  # the Workbench works without Tk
    tk = messagebox = simpledialog = ttk = None

DEFAULT_HOST = "10.0.2.18"
ERROR_TITLE = "Ошибка базы"

Row = tuple[str, Any]


class Workbench:
    """What the main window does, independent of any widgets."""

    def __init__(self, database: Database):
        self.database = database

    # Listings

    def sportsman_choices(self) -> list[tuple[str, Optional[Sportsman]]]:
        """Labels and sportsmen, headed by an empty choice."""
        return [("-", None)] + [
            (sportsman.full_name(), sportsman) for sportsman in self.database.all_sportsmen()
        ]

    def category_rows(self) -> list[tuple[str, Category]]:
        return [(category.name, category) for category in self.database.all_categories()]

    def exercise_rows(self) -> list[tuple[str, Exercise]]:
        return [(exercise.name, exercise) for exercise in self.database.all_exercises()]

    def training_rows(self, sportsman_id: int) -> list[tuple[str, Training]]:
        return [(training.label(), training) for training in self.database.trainings(sportsman_id)]

    def result_rows(self, training_id: int) -> list[tuple[str, Result]]:
        return [(result.label(), result) for result in self.database.results(training_id)]

    # Sportsmen

    def add_sportsman(self, form: SportsmanForm) -> Sportsman:
        sportsman = form.to_sportsman()
        self.database.add_sportsman(sportsman)
        return sportsman

    def edit_sportsman(self, sportsman: Sportsman, form: SportsmanForm) -> Sportsman:
        edited = replace(form, sportsman=sportsman).to_sportsman()
        self.database.edit_sportsman(edited)
        return edited

    def delete_sportsman(self, sportsman: Sportsman) -> None:
        self.database.delete_sportsman(sportsman)

    # Categories

    def add_category(self, name: str) -> Optional[Category]:
        """Store a new category; an empty name adds nothing."""
        if not name:
            return None
        category = Category(name)
        self.database.add_category(category)
        return category

    def rename_category(self, category: Category, name: str) -> Category:
        """Rename the category; an empty name leaves it as it is."""
        if name:
            category.name = name
            self.database.edit_category(category)
        return category

    def delete_category(self, category: Category) -> None:
        self.database.delete_category(category)

    # Exercises

    def add_exercise(self, name: str) -> Optional[Exercise]:
        """Store a new exercise; an empty name adds nothing."""
        if not name:
            return None
        exercise = Exercise(name)
        self.database.add_exercise(exercise)
        return exercise

    def rename_exercise(self, exercise: Exercise, name: str) -> Exercise:
        """Rename the exercise; an empty name leaves it as it is."""
        if name:
            exercise.name = name
            self.database.edit_exercise(exercise)
        return exercise

    def delete_exercise(self, exercise: Exercise) -> None:
        self.database.delete_exercise(exercise)

    # Trainings

    def add_training(self, sportsman_id: int, form: TrainingForm) -> Optional[Training]:
        """Store a training for a sportsman; no sportsman chosen adds nothing."""
        if not sportsman_id:
            return None
        form.sportsman_id = sportsman_id
        training = form.to_training()
        self.database.add_training(training)
        return training

    def edit_training(self, training: Training, form: TrainingForm) -> Training:
        edited = replace(form, training=training).to_training()
        self.database.edit_training(edited)
        return edited

    def delete_training(self, training: Training) -> None:
        self.database.delete_training(training)

    # Results

    def add_result(self, training_id: int, form: ResultForm) -> Result:
        form.training_id = training_id
        result = form.to_result()
        self.database.add_result(result)
        return result

    def delete_result(self, result: Result) -> None:
        self.database.delete_result(result)


# Widgets

Field = tuple[str, str, Any, Optional[list]]


def _ask(parent, title: str, fields: list[Field],
         check: Optional[Callable[[dict], Optional[str]]] = None) -> Optional[dict]:
    """Show a modal dialog with entries and choice boxes; None when cancelled."""
    top = tk.Toplevel(parent)
    top.title(title)
    top.transient(parent)
    widgets = {}
    for row, (key, label, initial, options) in enumerate(fields):
        ttk.Label(top, text=label).grid(row=row, column=0, sticky="w", padx=6, pady=3)
        if options is None:
            widget = ttk.Entry(top, width=40)
            widget.insert(0, initial)
        else:
            widget = ttk.Combobox(top, values=options, state="readonly", width=38)
            widget.current(initial)
        widget.grid(row=row, column=1, sticky="ew", padx=6, pady=3)
        widgets[key] = widget

    answer: dict = {}

    def collect() -> dict:
        return {
            key: widget.current() if isinstance(widget, ttk.Combobox) else widget.get()
            for key, widget in widgets.items()
        }

    def accept(_event=None):
        values = collect()
        problem = check(values) if check else None
        if problem:
            messagebox.showerror(title, problem, parent=top)
            return
        answer.update(values)
        top.destroy()

    buttons = ttk.Frame(top)
    ttk.Button(buttons, text="OK", command=accept).pack(side="left", padx=4)
    ttk.Button(buttons, text="Отмена", command=top.destroy).pack(side="left", padx=4)
    buttons.grid(row=len(fields), column=0, columnspan=2, pady=6)
    top.bind("<Return>", accept)
    top.bind("<Escape>", lambda _event: top.destroy())
    top.wait_visibility()
    top.grab_set()
    top.wait_window()
    return answer or None


def _fill_sportsman(parent, title: str, form: SportsmanForm) -> bool:
    values = _ask(parent, title, [
        ("surname", "Фамилия", form.surname, None),
        ("name", "Имя", form.name, None),
        ("middle_name", "Отчество", form.middle_name, None),
        ("born_date", "Дата рождения (дд.мм.гггг)", form.born_date, None),
        ("comments", "Комментарий", form.comments, None),
    ])
    if values is None:
        return False
    for key, value in values.items():
        setattr(form, key, value)
    return True


def _fill_training(parent, title: str, form: TrainingForm) -> bool:
    values = _ask(
        parent,
        title,
        [
            ("date", "Дата (дд.мм.гггг)", format_date(form.date), None),
            ("name", "Название", form.name, None),
            ("comments", "Комментарий", form.comments, None),
        ],
        lambda v: None if parse_date(v["date"]) else "Неверная дата",
    )
    if values is None:
        return False
    form.date = parse_date(values["date"])
    form.name = values["name"]
    form.comments = values["comments"]
    return True


def _fill_result(parent, title: str, form: ResultForm) -> bool:
    values = _ask(parent, title, [
        ("category_index", "Категория", form.category_index,
         [label for label, _ in form.category_choices]),
        ("exercise_index", "Упражнение", form.exercise_index,
         [label for label, _ in form.exercise_choices]),
        ("result", "Результат", form.result, None),
        ("status", "Состояние", form.status, None),
    ])
    if values is None:
        return False
    for key, value in values.items():
        setattr(form, key, value)
    return True


class _ItemList:
    """A scrolled list box whose lines carry objects."""

    def __init__(self, parent, on_activate=None, on_select=None):
        self.frame = ttk.Frame(parent)
        self.listbox = tk.Listbox(self.frame, exportselection=False)
        scroll = ttk.Scrollbar(self.frame, orient="vertical", command=self.listbox.yview)
        self.listbox.configure(yscrollcommand=scroll.set)
        self.listbox.pack(side="left", fill="both", expand=True)
        scroll.pack(side="right", fill="y")
        self._rows: list[Row] = []
        if on_activate:
            self.listbox.bind("<Double-Button-1>", lambda _e: self._fire(on_activate))
        if on_select:
            self.listbox.bind("<<ListboxSelect>>", lambda _e: self._fire(on_select))

    def _fire(self, callback):
        picked = self.selected()
        if picked is not None:
            callback(*picked)

    def set_rows(self, rows: list[Row]) -> None:
        self.listbox.delete(0, "end")
        self._rows = list(rows)
        for label, _ in self._rows:
            self.listbox.insert("end", label)

    def selected(self) -> Optional[Row]:
        chosen = self.listbox.curselection()
        return self._rows[chosen[0]] if chosen else None


def _button_bar(parent, buttons) -> None:
    bar = ttk.Frame(parent)
    for text, command in buttons:
        ttk.Button(bar, text=text, command=command).pack(side="left", padx=3, pady=3)
    bar.pack(fill="x")


class MainWindow:
    """The journal window: sportsmen, dictionaries, trainings and results."""

    def __init__(self, root, workbench: Workbench):
        if tk is None:
            raise RuntimeError("Tk is not available")
        self.root = root
        self.workbench = workbench
        self._choices: list[tuple[str, Optional[Sportsman]]] = []
        self._sportsman_id = 0
        root.title("Физическая подготовка")
        root.report_callback_exception = self._report

        notebook = ttk.Notebook(root)
        notebook.pack(fill="both", expand=True)

        tab = ttk.Frame(notebook)
        notebook.add(tab, text="Спортсмены")
        self._sportsmen = _ItemList(tab, on_activate=self._edit_sportsman)
        self._sportsmen.frame.pack(fill="both", expand=True)
        _button_bar(tab, [
            ("Добавить", self._add_sportsman),
            ("Изменить", lambda: self._with_selected(self._sportsmen, self._edit_sportsman)),
            ("Удалить", lambda: self._with_selected(self._sportsmen, self._delete_sportsman)),
        ])

        tab = ttk.Frame(notebook)
        notebook.add(tab, text="Категории")
        self._categories = _ItemList(tab, on_activate=self._rename_category)
        self._categories.frame.pack(fill="both", expand=True)
        _button_bar(tab, [
            ("Добавить", self._add_category),
            ("Изменить", lambda: self._with_selected(self._categories, self._rename_category)),
            ("Удалить", lambda: self._with_selected(self._categories, self._delete_category)),
        ])

        tab = ttk.Frame(notebook)
        notebook.add(tab, text="Упражнения")
        self._exercises = _ItemList(tab, on_activate=self._rename_exercise)
        self._exercises.frame.pack(fill="both", expand=True)
        _button_bar(tab, [
            ("Добавить", self._add_exercise),
            ("Изменить", lambda: self._with_selected(self._exercises, self._rename_exercise)),
            ("Удалить", lambda: self._with_selected(self._exercises, self._delete_exercise)),
        ])

        tab = ttk.Frame(notebook)
        notebook.add(tab, text="Журнал")
        self._sportsman_box = ttk.Combobox(tab, state="readonly")
        self._sportsman_box.pack(fill="x", padx=3, pady=3)
        self._sportsman_box.bind("<<ComboboxSelected>>", lambda _e: self._choose_sportsman())
        self._trainings = _ItemList(
            tab, on_activate=self._edit_training, on_select=self._show_results
        )
        self._trainings.frame.pack(fill="both", expand=True)
        _button_bar(tab, [
            ("Добавить тренировку", self._add_training),
            ("Изменить", lambda: self._with_selected(self._trainings, self._edit_training)),
            ("Удалить", lambda: self._with_selected(self._trainings, self._delete_training)),
        ])
        self._results = _ItemList(tab)
        self._results.frame.pack(fill="both", expand=True)
        _button_bar(tab, [
            ("Добавить результат", self._add_result),
            ("Удалить результат", lambda: self._with_selected(self._results, self._delete_result)),
        ])

        self.refresh()

    def refresh(self) -> None:
        """Reload every list from the database."""
        self._load_sportsmen()
        self._categories.set_rows(self.workbench.category_rows())
        self._exercises.set_rows(self.workbench.exercise_rows())

    def _report(self, exc_type, exc, tb) -> None:
        if isinstance(exc, DatabaseError):
            messagebox.showerror(ERROR_TITLE, str(exc), parent=self.root)
        else:
            traceback.print_exception(exc_type, exc, tb, file=sys.stderr)

    @staticmethod
    def _with_selected(items: _ItemList, action) -> None:
        picked = items.selected()
        if picked is not None:
            action(*picked)

    def _confirm(self, title: str, question: str) -> bool:
        return messagebox.askyesno(title, question, parent=self.root)

    # Sportsmen

    def _load_sportsmen(self) -> None:
        self._choices = self.workbench.sportsman_choices()
        self._sportsmen.set_rows(self._choices[1:])
        self._sportsman_box.configure(values=[label for label, _ in self._choices])
        self._sportsman_box.current(0)
        self._choose_sportsman()

    def _add_sportsman(self) -> None:
        form = SportsmanForm()
        if _fill_sportsman(self.root, "Новый спортсмен", form):
            self.workbench.add_sportsman(form)
            self._load_sportsmen()

    def _edit_sportsman(self, _label: str, sportsman: Sportsman) -> None:
        form = SportsmanForm.from_sportsman(sportsman)
        if _fill_sportsman(self.root, "Спортсмен", form):
            self.workbench.edit_sportsman(sportsman, form)
            self._load_sportsmen()

    def _delete_sportsman(self, label: str, sportsman: Sportsman) -> None:
        if self._confirm("Удаление спортсмена", f"Удалить {label}?"):
            self.workbench.delete_sportsman(sportsman)
            self._load_sportsmen()

    # Categories and exercises

    def _add_category(self) -> None:
        name = simpledialog.askstring(
            "Новая категория", "Введите название новой категории", parent=self.root
        )
        if self.workbench.add_category(name or "") is not None:
            self._categories.set_rows(self.workbench.category_rows())

    def _rename_category(self, _label: str, category: Category) -> None:
        name = simpledialog.askstring(
            "Редактирование", "Новое название категории",
            initialvalue=category.name, parent=self.root,
        )
        self.workbench.rename_category(category, name or "")
        self._categories.set_rows(self.workbench.category_rows())

    def _delete_category(self, label: str, category: Category) -> None:
        if self._confirm("Удаление категории", f"Удалить {label}?"):
            self.workbench.delete_category(category)
            self._categories.set_rows(self.workbench.category_rows())

    def _add_exercise(self) -> None:
        name = simpledialog.askstring(
            "Новая категория", "Введите название нового упражнения", parent=self.root
        )
        if self.workbench.add_exercise(name or "") is not None:
            self._exercises.set_rows(self.workbench.exercise_rows())

    def _rename_exercise(self, _label: str, exercise: Exercise) -> None:
        name = simpledialog.askstring(
            "Редактирование", "Новое название упражнения",
            initialvalue=exercise.name, parent=self.root,
        )
        self.workbench.rename_exercise(exercise, name or "")
        self._exercises.set_rows(self.workbench.exercise_rows())

    def _delete_exercise(self, label: str, exercise: Exercise) -> None:
        if self._confirm("Удаление упражнения", f"Удалить {label}?"):
            self.workbench.delete_exercise(exercise)
            self._exercises.set_rows(self.workbench.exercise_rows())

    # Trainings

    def _choose_sportsman(self) -> None:
        index = self._sportsman_box.current()
        chosen = self._choices[index][1] if 0 <= index < len(self._choices) else None
        self._sportsman_id = chosen.base_id if chosen is not None else 0
        self._load_trainings(self._sportsman_id)

    def _load_trainings(self, sportsman_id: int) -> None:
        self._trainings.set_rows(self.workbench.training_rows(sportsman_id))
        self._results.set_rows([])

    def _add_training(self) -> None:
        if not self._sportsman_id:
            return
        form = TrainingForm(sportsman_id=self._sportsman_id)
        if _fill_training(self.root, "Новая тренировка", form):
            self.workbench.add_training(self._sportsman_id, form)
            self._load_trainings(self._sportsman_id)

    def _edit_training(self, _label: str, training: Training) -> None:
        form = TrainingForm.from_training(training)
        if _fill_training(self.root, "Тренировка", form):
            edited = self.workbench.edit_training(training, form)
            self._load_trainings(edited.sportsman_id)

    def _delete_training(self, label: str, training: Training) -> None:
        if self._confirm("Удаление тренировки", f"Удалить тренировку {label}?"):
            self.workbench.delete_training(training)
            self._load_trainings(training.sportsman_id)

    # Results

    def _show_results(self, _label: str, training: Training) -> None:
        self._results.set_rows(self.workbench.result_rows(training.base_id))

    def _add_result(self) -> None:
        picked = self._trainings.selected()
        if picked is None:
            return
        training_id = picked[1].base_id
        form = ResultForm()
        form.load_choices(self.workbench.database)
        if _fill_result(self.root, "Новый результат", form):
            self.workbench.add_result(training_id, form)
            self._results.set_rows(self.workbench.result_rows(training_id))

    def _delete_result(self, label: str, result: Result) -> None:
        if self._confirm("Удаление результата", f"Удалить результата упражнения {label}?"):
            self.workbench.delete_result(result)
            self._results.set_rows(self.workbench.result_rows(result.training_id))


def main(argv=None) -> int:
    """Connect to the journal database and run the window."""
    parser = argparse.ArgumentParser(prog="physfit", description="Physical fitness journal.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--database", default=DEFAULT_DATABASE)
    parser.add_argument("--user", default=DEFAULT_USER)
    args = parser.parse_args(argv)

    if tk is None:
        print("Tk is not available", file=sys.stderr)
        return 1

    password = os.environ.get("PHYSFIT_PASSWORD", PASSWORD)
    root = tk.Tk()
    try:
        database = Database.mysql(
            args.host, args.port, args.database, args.user, password=password
        )
    except DatabaseError as exc:
        root.withdraw()
        messagebox.showerror(
            ERROR_TITLE, "При открытии базы данных произошла ошибка:\n" + str(exc)
        )
        root.destroy()
        return 0

    MainWindow(root, Workbench(database))
    root.mainloop()
    return 0