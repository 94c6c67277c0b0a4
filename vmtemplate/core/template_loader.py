"""Loading, validation and serialization of template documents.

Documents arrive as JSON or YAML. They are decoded into plain dicts, validated
into an :class:`~vmtemplate.core.models.APIModel` and reported back as
structured issues when they do not fit the model. Each issue names the wire
path of the offending field and the constraint it broke:

- ``required``: a required field is missing or empty
- ``range``: a numeric value is outside its allowed range (ports, disk sizes)
- ``enum``: a value is not one of the enumerated choices
- ``type``: a value has the wrong type
- ``format``: the document itself could not be read or decoded
- ``policy``: an advisory check was promoted to an error

Serialization goes the other way and keeps the absent/present distinction:
fields that were not in the source document are not written back.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from .config import JSON_SUFFIXES, YAML_SUFFIXES, Settings, settings
from .models import APIModel, VMConfigurator
from .template_checks import run_template_checks

logger = logging.getLogger(__name__)


_CONSTRAINT_BY_ERROR_TYPE = {
    "missing": "required",
    "string_too_short": "required",
    "greater_than": "range",
    "greater_than_equal": "range",
    "less_than": "range",
    "less_than_equal": "range",
    "enum": "enum",
}


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found in a template document."""

    field: str
    constraint: str
    message: str

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class TemplateValidationError(Exception):
    """Raised when a template document cannot be turned into a model."""

    def __init__(self, issues: Iterable[ValidationIssue]):
        self.issues: List[ValidationIssue] = list(issues)
        if not self.issues:
            self.issues = [ValidationIssue("", "format", "Unknown template validation error")]
        super().__init__(format_validation_issues(self.issues))

    @property
    def fields(self) -> List[str]:
        return [issue.field for issue in self.issues]


def format_validation_issues(issues: Iterable[ValidationIssue]) -> str:
    return "; ".join(str(issue) for issue in issues)


def issues_from_validation_error(exc: ValidationError) -> List[ValidationIssue]:
    """Translate pydantic errors into issues keyed by wire path."""
    issues = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"])
        constraint = _CONSTRAINT_BY_ERROR_TYPE.get(error["type"], "type")
        issues.append(ValidationIssue(field=path, constraint=constraint, message=error["msg"]))
    return issues


# ============================================================================
# Parsing
# ============================================================================


def parse_template(
    data: Dict[str, Any],
    configurator: Optional[VMConfigurator] = None,
) -> APIModel:
    """Validate a decoded document and return the template model.

    Raises:
        TemplateValidationError: If the document does not fit the model.
    """
    if not isinstance(data, dict):
        raise TemplateValidationError(
            [ValidationIssue("", "format", f"Expected a mapping, got {type(data).__name__}")]
        )

    try:
        template = APIModel.model_validate(data)
    except ValidationError as exc:
        issues = issues_from_validation_error(exc)
        logger.warning(
            "Template validation failed: %s",
            format_validation_issues(issues),
        )
        raise TemplateValidationError(issues) from exc

    logger.debug(
        "Template validation succeeded (category: %s, location: %s)",
        template.vm_category.value if template.vm_category else "N/A",
        template.location or "N/A",
    )

    if configurator is not None:
        template = template.with_configurator(configurator)
    return template


def validate_template(data: Dict[str, Any]) -> Tuple[Optional[APIModel], Optional[str]]:
    """Validate a decoded document without raising.

    Returns:
        Tuple of (template, error_message)
        - On success: (APIModel instance, None)
        - On failure: (None, error description string)
    """
    try:
        return parse_template(data), None
    except TemplateValidationError as exc:
        return None, str(exc)


# ============================================================================
# Documents on disk
# ============================================================================


def _format_error(path: Path, message: str) -> TemplateValidationError:
    return TemplateValidationError([ValidationIssue("", "format", f"{path}: {message}")])


def load_template_document(
    path: Union[str, Path],
    config: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Read a JSON or YAML template document from disk into a dict."""
    config = config or settings
    document_path = Path(path)
    suffix = document_path.suffix.lower()

    if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
        raise _format_error(
            document_path,
            f"Unsupported document type '{suffix or '<none>'}'; expected one of "
            + ", ".join(JSON_SUFFIXES + YAML_SUFFIXES),
        )

    if not document_path.is_file():
        raise _format_error(document_path, "Template document not found")

    size = document_path.stat().st_size
    if size > config.template_max_document_bytes:
        raise _format_error(
            document_path,
            f"Template document is {size} bytes; limit is {config.template_max_document_bytes}",
        )

    try:
        with document_path.open("r", encoding=config.template_default_encoding) as handle:
            if suffix in JSON_SUFFIXES:
                raw = json.load(handle)
            else:
                raw = yaml.safe_load(handle)
    except (OSError, UnicodeDecodeError) as exc:
        raise _format_error(document_path, f"Unable to read document: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise _format_error(document_path, f"Invalid JSON: {exc}") from exc
    except yaml.YAMLError as exc:
        raise _format_error(document_path, f"Invalid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise _format_error(document_path, "Template root must be a mapping")

    return raw


def load_template(
    path: Union[str, Path],
    configurator: Optional[VMConfigurator] = None,
    config: Optional[Settings] = None,
) -> APIModel:
    """Load, validate and check a template document.

    Advisory check warnings are logged. With ``template_strict_checks``
    enabled they are raised as ``policy`` issues instead.
    """
    config = config or settings
    template = parse_template(load_template_document(path, config), configurator)

    result = run_template_checks(template)
    for issue in result.warnings:
        logger.warning("Template '%s': %s", path, issue.message)

    blocking = list(result.errors)
    if config.template_strict_checks:
        blocking.extend(result.warnings)
    if blocking:
        raise TemplateValidationError(
            ValidationIssue("", "policy", issue.message) for issue in blocking
        )

    logger.info(
        "Loaded template '%s' with %d warning(s)",
        path,
        len(result.warnings),
    )
    return template


# ============================================================================
# Serialization
# ============================================================================


def dump_template(template: APIModel) -> Dict[str, Any]:
    """Serialize a template to a wire-format dict.

    Only fields that were set when the model was built are written, so an
    optional field absent from the source stays absent.
    """
    return template.model_dump(mode="json", by_alias=True, exclude_unset=True)


def dump_template_json(template: APIModel, indent: Optional[int] = None) -> str:
    return template.model_dump_json(by_alias=True, exclude_unset=True, indent=indent)
