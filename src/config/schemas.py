"""
JSON Schema for the render tree handed to the host UI.

RENDER_TREE_SCHEMA describes the dict produced by
build_render_tree_dict(): lines of tagged nodes plus the three optional
collapsible sections.
"""
from src.config.constants import PIPELINE_VERSION

# =============================================================================
# Render nodes
# =============================================================================
_TEXT_NODE: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["kind", "text"],
    "properties": {
        "kind": {"const": "text"},
        "text": {"type": "string", "minLength": 1},
    },
}

_LINK_NODE: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["kind", "href", "display_text", "title"],
    "properties": {
        "kind": {"const": "link"},
        "href": {"type": "string", "minLength": 1},
        "display_text": {"type": "string"},
        "title": {"type": "string", "minLength": 1},
        "attachment_id": {"type": ["string", "null"]},
    },
}

_IMAGE_NODE: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["kind", "src", "alt"],
    "properties": {
        "kind": {"const": "image"},
        "src": {"type": "string", "minLength": 1},
        "alt": {"type": "string"},
        "attachment_id": {"type": ["string", "null"]},
    },
}

_LINES: dict = {
    "type": "array",
    "items": {
        "type": "array",
        "minItems": 1,
        "items": {"oneOf": [_TEXT_NODE, _LINK_NODE, _IMAGE_NODE]},
    },
}

# =============================================================================
# Render tree
# =============================================================================
RENDER_TREE_SCHEMA: dict = {
    "name": "message_render_tree_v1",
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "required": ["main", "was_transformed", "pipeline_version"],
        "properties": {
            "main": _LINES,
            "quoted": {
                "type": ["object", "null"],
                "additionalProperties": False,
                "required": ["expanded", "headers", "lines"],
                "properties": {
                    "expanded": {"type": "boolean"},
                    "headers": {
                        "type": "object",
                        "additionalProperties": False,
                        "properties": {
                            "from": {"type": "string"},
                            "subject": {"type": "string"},
                            "date": {"type": "string"},
                        },
                    },
                    "lines": _LINES,
                },
            },
            "signature": {
                "type": ["object", "null"],
                "additionalProperties": False,
                "required": ["expanded", "lines"],
                "properties": {
                    "expanded": {"type": "boolean"},
                    "lines": _LINES,
                },
            },
            "source": {
                "type": ["object", "null"],
                "additionalProperties": False,
                "required": ["expanded"],
                "properties": {
                    "expanded": {"type": "boolean"},
                    "text": {"type": ["string", "null"]},
                },
            },
            "was_transformed": {"type": "boolean"},
            "pipeline_version": {"type": "string", "const": PIPELINE_VERSION},
        },
    },
}
