"""Study hub administration: books, notes, assignments, notices and exams."""

__version__ = "0.1.0"
