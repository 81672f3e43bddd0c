"""Journal of sportsmen, trainings and exercise results stored in MySQL, with a Tk window."""

__version__ = "0.1.0"