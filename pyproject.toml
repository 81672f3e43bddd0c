[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "physfit"
version = "0.1.0"
description = "Desktop journal of athletes, trainings and exercise results kept in a MySQL database"
requires-python = ">=3.10"
keywords = ["sports", "training", "fitness", "athletes", "mysql", "tkinter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "pymysql",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
physfit = "physfit.mainwindow:main"

[tool.hatch.build.targets.wheel]
packages = ["physfit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
