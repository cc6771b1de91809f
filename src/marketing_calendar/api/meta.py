from __future__ import annotations

from collections import defaultdict
from typing import Dict, List

from .registry import get_api_functions, register_api


@register_api(
    "list_available_tools",
    description="List the registered calendar functions with their parameter schemas, grouped by category.",
    category="meta",
    tags=("tools", "metadata"),
)
def list_available_tools() -> Dict[str, object]:
    functions = sorted(get_api_functions(), key=lambda item: item.name)
    categories: Dict[str, List[str]] = defaultdict(list)
    for func in functions:
        categories[func.category].append(func.name)
    return {
        "tools": [
            {
                "name": func.name,
                "description": func.description,
                "category": func.category,
                "tags": list(func.tags),
                "parameters": func.parameter_schema,
            }
            for func in functions
        ],
        "categories": dict(categories),
    }
