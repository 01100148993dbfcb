"""
Output-language profiles.

Each subpackage provides a LanguageProfile and its templates.
"""

from .python import PythonProfile
from .typescript import TypeScriptProfile

__all__ = ["PythonProfile", "TypeScriptProfile"]
