"""
JSON Schemas for structured LLM responses.

Schemas are wrapped as {'name', 'strict', 'schema'} for OpenAI JSON Schema mode.
"""

_SUB_SCORE = {"type": "number", "minimum": 0, "maximum": 100}

RANKING_SCHEMA = {
    "name": "owner_ranking_schema",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "required": ["rankings"],
        "properties": {
            "rankings": {
                "type": "array",
                "items": {
                    "type": "object",
                    "additionalProperties": False,
                    "required": [
                        "member_id",
                        "competence",
                        "availability",
                        "growth_potential",
                        "continuity",
                        "justification",
                    ],
                    "properties": {
                        "member_id": {"type": "string"},
                        "competence": _SUB_SCORE,
                        "availability": _SUB_SCORE,
                        "growth_potential": _SUB_SCORE,
                        "continuity": _SUB_SCORE,
                        "justification": {
                            "type": "array",
                            "items": {"type": "string"},
                            "maxItems": 5,
                        },
                    },
                },
            },
        },
    },
}
