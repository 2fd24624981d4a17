"""
Persistence backends for the adaptive quiz.

- QuizStore: asynchronous interface (questions, attempts, sessions)
- MemoryQuizStore: in-process tables, for tests and embedding
- JsonQuizStore: one JSON file per table in a data directory
"""

from .base import TABLES, QuizStore
from .json_store import JsonQuizStore
from .memory import MemoryQuizStore
from .table import Table

__all__ = [
    "TABLES",
    "QuizStore",
    "MemoryQuizStore",
    "JsonQuizStore",
    "Table",
]
