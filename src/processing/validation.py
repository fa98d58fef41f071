"""
Render tree validation — schema conformance plus business rules.

Implements:
- Schema conformance (jsonschema)
- Link titles carry the untruncated href
- Collapsed sections carry no lines / no source text
- Source text present whenever the source section is expanded

Never raises: problems are reported through ValidationResult.
"""
import logging
from typing import List

from jsonschema import ValidationError, validate

from src.config.schemas import RENDER_TREE_SCHEMA
from src.models.validation import ValidationResult

logger = logging.getLogger(__name__)


def _iter_nodes(data: dict):
    sections = [data.get("main") or []]
    for key in ("quoted", "signature"):
        section = data.get(key)
        if section:
            sections.append(section.get("lines") or [])
    for lines in sections:
        for line in lines:
            yield from line


def _check_links(data: dict, errors: List[str]) -> None:
    for node in _iter_nodes(data):
        if node.get("kind") == "link" and node["title"] != node["href"]:
            errors.append(
                f"link title must equal href: title={node['title']!r} href={node['href']!r}"
            )


def _check_sections(data: dict, errors: List[str], warnings: List[str]) -> None:
    for key in ("quoted", "signature"):
        section = data.get(key)
        if section and not section["expanded"] and section["lines"]:
            errors.append(f"collapsed {key} section must not carry lines")
        if section and section["expanded"] and not section["lines"]:
            warnings.append(f"expanded {key} section has no lines")

    source = data.get("source")
    if source:
        if source["expanded"] and source.get("text") is None:
            errors.append("expanded source section must carry the original text")
        if not source["expanded"] and source.get("text") is not None:
            errors.append("collapsed source section must not carry text")
        if not data.get("was_transformed"):
            warnings.append("source section offered for an untransformed body")


def validate_render_tree(data: dict) -> ValidationResult:
    """
    Validate a serialized render tree.

    Args:
        data: Output of build_render_tree_dict().

    Returns:
        ValidationResult with valid flag, errors, warnings and the data.
    """
    errors: List[str] = []
    warnings: List[str] = []

    # ------------------------------------------------------------------
    # Stage 1: Schema validation
    # ------------------------------------------------------------------
    try:
        validate(instance=data, schema=RENDER_TREE_SCHEMA["schema"])
    except ValidationError as e:
        errors.append(f"Schema violation: {e.message}")
        return ValidationResult(valid=False, errors=errors, warnings=warnings)

    # ------------------------------------------------------------------
    # Stage 2: Business rules
    # ------------------------------------------------------------------
    _check_links(data, errors)
    _check_sections(data, errors, warnings)

    if errors:
        logger.warning("Render tree validation failed: %s", errors)

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        data=data,
    )
