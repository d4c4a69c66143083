"""Gate for bulk-save candidates.

Each rule returns the first failure message for a candidate, or None. Messages
are returned to the caller verbatim, per batch item.
"""

import math
from collections.abc import Collection
from typing import Any

from field_mapper.geometry.bbox import as_number, check_normalized, check_pixel
from field_mapper.geometry.exceptions import BBoxError

INVALID_ANNOTATION = "Invalid annotation"
INVALID_PROCESS = "Invalid process id"
INVALID_PAGE = "Invalid page"
FIELD_NAME_REQUIRED = "field_name required"
BBOX_REQUIRED = "Either bbox_norm or bbox_pixel is required"
INVALID_SCALE = "Invalid scale"
METADATA_NOT_OBJECT = "metadata must be an object"
FIELD_HEADER_NOT_STRING = "field_header must be a string"
FIELD_TYPE_NOT_STRING = "field_type must be a string"


def validate(candidate: Any, process_ids: Collection[str]) -> str | None:
    """Return the reason a candidate cannot be persisted, or None if it can.

    Pure: the outcome depends only on the candidate and the known process ids.
    """
    if not isinstance(candidate, dict):
        return INVALID_ANNOTATION
    for rule in RULES:
        error = rule(candidate, process_ids)
        if error is not None:
            return error
    return None


def _check_process(candidate: dict[str, Any], process_ids: Collection[str]) -> str | None:
    if str(candidate.get("process")) not in process_ids:
        return INVALID_PROCESS
    return None


def _check_page(candidate: dict[str, Any], _process_ids: Collection[str]) -> str | None:
    page = candidate.get("page")
    # Pages arrive as JSON numbers; numeric strings are not accepted here.
    if isinstance(page, bool) or not isinstance(page, (int, float)):
        return INVALID_PAGE
    if not math.isfinite(page) or page < 1 or page != int(page):
        return INVALID_PAGE
    return None


def _check_field_name(candidate: dict[str, Any], _process_ids: Collection[str]) -> str | None:
    name = candidate.get("field_name")
    if not name or not isinstance(name, str):
        return FIELD_NAME_REQUIRED
    return None


def _check_bbox(candidate: dict[str, Any], _process_ids: Collection[str]) -> str | None:
    bbox_norm = candidate.get("bbox_norm")
    bbox_pixel = candidate.get("bbox_pixel")
    try:
        if isinstance(bbox_norm, list):
            check_normalized(bbox_norm)
            # A pixel capture sent alongside is persisted too, so it must be well formed.
            if isinstance(bbox_pixel, list):
                check_pixel(bbox_pixel)
        elif isinstance(bbox_pixel, list):
            check_pixel(bbox_pixel)
        else:
            return BBOX_REQUIRED
    except BBoxError as exc:
        return str(exc)
    return None


# Optional fields: absent or empty values fall back to defaults when stored.
def _check_scale(candidate: dict[str, Any], _process_ids: Collection[str]) -> str | None:
    scale = candidate.get("scale")
    if not scale:
        return None
    number = as_number(scale)
    if number is None or number <= 0:
        return INVALID_SCALE
    return None


def _check_metadata(candidate: dict[str, Any], _process_ids: Collection[str]) -> str | None:
    metadata = candidate.get("metadata")
    if metadata and not isinstance(metadata, dict):
        return METADATA_NOT_OBJECT
    return None


def _check_labels(candidate: dict[str, Any], _process_ids: Collection[str]) -> str | None:
    if candidate.get("field_header") and not isinstance(candidate["field_header"], str):
        return FIELD_HEADER_NOT_STRING
    if candidate.get("field_type") and not isinstance(candidate["field_type"], str):
        return FIELD_TYPE_NOT_STRING
    return None


RULES = (
    _check_process,
    _check_page,
    _check_field_name,
    _check_bbox,
    _check_scale,
    _check_metadata,
    _check_labels,
)
