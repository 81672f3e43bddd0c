# physfit

physfit keeps a journal of sportsmen, their training sessions and the
results they achieve in individual exercises. The data lives in a MySQL
database; the package offers a small Tk window for working with it and a
Python API that does the same from code.

## What it manages

- **Sportsmen** – surname, name, middle name, date of birth and comments.
- **Categories** and **exercises** – plain named reference lists.
- **Trainings** – a dated, named session with comments, belonging to one
  sportsman.
- **Results** – the outcome of one exercise within a training, with a
  category and a numeric status.

The database must already contain the tables `PhysFit_sportsmens`,
`PhysFit_category`, `PhysFit_exercise`, `PhysFit_trainings` and
`PhysFit_results`.

## Installation

```
pip install .
```

The window needs Python's `tkinter`. To run the tests:

```
pip install ".[test]"
pytest
```

## The desktop window

```
physfit
```

connects to the database and opens the main window. Options:

- `--host` – database host (default `10.0.2.18`)
- `--port` – database port (default `3306`)
- `--database` – database name (default `corusant`)
- `--user` – user name (default `ordo`)

The password is read from the `PHYSFIT_PASSWORD` environment variable. If
the database cannot be opened, an error box is shown and the program ends.
If Tk is not available, the command prints a message and exits with
status 1.

The window has tabs for sportsmen, categories and exercises, each with
buttons to add, edit and delete entries (double-clicking an entry edits it).
The journal tab lets you pick a sportsman, see and manage his trainings,
and, for the selected training, add and delete results. Dates are shown
and entered as `dd.mm.yyyy`; deletions ask for confirmation.

## Using it from Python

`physfit.database.Database` runs the queries and returns the dataclasses
from `physfit.models` (`Sportsman`, `Category`, `Exercise`, `Training`,
`Result`). `physfit.mainwindow.Workbench` wraps it with the operations the
window offers.

```python
from physfit.database import Database
from physfit.mainwindow import Workbench

password = "password"
db = Database.mysql(
    host="localhost",
    port=3306,
    database="physfit",
    user="user",
    password=password,
)

bench = Workbench(db)
bench.add_category("Endurance")
bench.add_exercise("Push-ups")

for label, exercise in bench.exercise_rows():
    print(label, exercise.base_id)
```

`Database` can also be built directly from any DB-API `connect` function
and its parameter style (`"named"`, `"pyformat"`, `"qmark"` or `"format"`);
a new connection is opened for every query.

Failed queries raise `physfit.database.DatabaseError`; the text of the most
recent error is also kept in the `Database.last_error` property.

The forms in `physfit.forms` (`SportsmanForm`, `TrainingForm`,
`ResultForm`) hold the values of the edit dialogs and turn them into
records. Dates typed by a user are read with `physfit.forms.parse_date`
(which returns `None` for anything that is not a valid `dd.mm.yyyy` date)
and shown with `physfit.forms.format_date`.

## What it does not do

- It does not create the database or its tables.
- Results cannot be edited from the window or the `Workbench`; only
  `Database.edit_result` updates a stored result.