"""
Python output profile.

Generates a layered Python package of dataclasses, ABC ports and
sqlite3 / in-memory persistence adapters.
"""

from .config import PYTHON_PRIMITIVE_TYPES, python_repository_methods
from .naming import PYTHON_RESERVED_WORDS, create_python_sanitizer
from .profile import PythonProfile

__all__ = [
    "PythonProfile",
    "PYTHON_PRIMITIVE_TYPES",
    "PYTHON_RESERVED_WORDS",
    "create_python_sanitizer",
    "python_repository_methods",
]
