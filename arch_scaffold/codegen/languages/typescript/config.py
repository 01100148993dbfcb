"""
TypeScript-specific type tables and repository port shape.
"""

from typing import Any, Dict, List

TYPESCRIPT_PRIMITIVE_TYPES = frozenset(
    {
        "string",
        "number",
        "boolean",
        "Date",
        "Array",
        "Map",
        "Set",
        "any",
        "void",
        "null",
        "undefined",
    }
)

TYPESCRIPT_UNKNOWN_TYPE = "any"

# Generic built-ins need type arguments to be valid annotations
TYPESCRIPT_TYPE_MAP = {
    "Array": "Array<any>",
    "Map": "Map<any, any>",
    "Set": "Set<any>",
}


def typescript_repository_methods(
    entity_type: str, entity_var: str
) -> List[Dict[str, Any]]:
    """CRUD methods of a TypeScript repository port."""
    return [
        {
            "name": "findById",
            "operation": "find",
            "params": [{"name": "id", "type": "string"}],
            "output": f"{entity_type} | null",
        },
        {
            "name": "save",
            "operation": "save",
            "params": [{"name": entity_var, "type": entity_type}],
            "output": "void",
        },
        {
            "name": "delete",
            "operation": "delete",
            "params": [{"name": "id", "type": "string"}],
            "output": "void",
        },
        {
            "name": "exists",
            "operation": "exists",
            "params": [{"name": "id", "type": "string"}],
            "output": "boolean",
        },
    ]
