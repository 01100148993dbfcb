"""
Python-specific type tables and repository port shape.
"""

from typing import Any, Dict, List

PYTHON_PRIMITIVE_TYPES = frozenset(
    {
        "str",
        "int",
        "float",
        "bool",
        "datetime",
        "list",
        "dict",
        "set",
        "any",
        "None",
        "bytes",
        "UUID",
    }
)

PYTHON_UNKNOWN_TYPE = "Any"

# Spelling of primitive tokens that differ from the token itself
PYTHON_TYPE_MAP = {
    "any": "Any",
}

# Types that require imports
PYTHON_IMPORT_MAP = {
    "datetime": "from datetime import datetime",
    "Any": "from typing import Any",
    "UUID": "from uuid import UUID",
}


def python_repository_methods(entity_type: str, entity_var: str) -> List[Dict[str, Any]]:
    """CRUD methods of a Python repository port."""
    return [
        {
            "name": "find_by_id",
            "operation": "find",
            "params": [{"name": "id", "type": "UUID"}],
            "output": f"Optional[{entity_type}]",
        },
        {
            "name": "save",
            "operation": "save",
            "params": [{"name": entity_var, "type": entity_type}],
            "output": "None",
        },
        {
            "name": "delete",
            "operation": "delete",
            "params": [{"name": "id", "type": "UUID"}],
            "output": "None",
        },
        {
            "name": "find_all",
            "operation": "list",
            "params": [],
            "output": f"List[{entity_type}]",
        },
    ]
