"""Decoding helpers for /predict responses.

The service does not pin down the shape of a single-text answer. It may send
a bare JSON string, or an object carrying the label under ``sentiment``,
``prediction`` or ``label``. ``LABEL_EXTRACTORS`` tries them in that order;
anything else becomes ``"Unknown"`` rather than an error.
"""

import base64
import binascii
import logging
from numbers import Number

from sentiment_predictor.config import MESSAGES
from sentiment_predictor.state import ImageData

logger = logging.getLogger(__name__)


def _usable(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, Number):
        return str(value)
    return None


def bare_string(data):
    return data if isinstance(data, str) and data else None


def field_extractor(name):
    def extract(data):
        if not isinstance(data, dict):
            return None
        return _usable(data.get(name))

    extract.__name__ = f"field_{name}"
    return extract


LABEL_EXTRACTORS = (
    bare_string,
    field_extractor("sentiment"),
    field_extractor("prediction"),
    field_extractor("label"),
)


def normalize_label(data, extractors=LABEL_EXTRACTORS):
    for extract in extractors:
        label = extract(data)
        if label is not None:
            return label
    logger.warning("Unrecognised prediction payload: %r", data)
    return MESSAGES["unknown_label"]


def error_message(response):
    """Message for a failed response: its ``error`` field, else the status."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("error")
        if isinstance(message, str) and message:
            return message
    return f"Request failed with status {response.status_code}"


def decode_graph(header_value):
    """Turn the base64 chart header into ImageData; None when absent or malformed."""
    if not header_value:
        return None
    try:
        data = base64.b64decode(header_value, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Ignoring malformed graph header (%d chars)", len(header_value))
        return None
    return ImageData(data)


def is_csv(content_type):
    if not content_type:
        return False
    return "csv" in content_type.lower()
