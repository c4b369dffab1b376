import logging

import requests

from sentiment_predictor import responses
from sentiment_predictor.config import (
    CSV_MIME_TYPE,
    GRAPH_HEADER,
    MESSAGES,
    PREDICTION_ENDPOINT,
    REQUEST_TIMEOUT,
    UPLOAD_FIELD,
)
from sentiment_predictor.errors import ContentError, ServiceError
from sentiment_predictor.state import BulkCompleted, CsvBlob, Label

logger = logging.getLogger(__name__)


def _check_status(response):
    # A failing status short-circuits before any header or body is looked at.
    if not response.ok:
        message = responses.error_message(response)
        logger.warning("Prediction request failed (%s): %s", response.status_code, message)
        raise ServiceError(response.status_code, message)


def predict_text(session, text, endpoint=PREDICTION_ENDPOINT, timeout=REQUEST_TIMEOUT):
    """Send one text for prediction and return its normalized Label."""
    logger.info("Requesting single prediction (%d chars)", len(text))
    response = session.post(endpoint, json={"text": text}, timeout=timeout)
    _check_status(response)

    try:
        data = response.json()
    except ValueError as exc:
        raise ContentError(MESSAGES["not_json"]) from exc

    return Label(responses.normalize_label(data))


def predict_file(session, file, endpoint=PREDICTION_ENDPOINT, timeout=REQUEST_TIMEOUT):
    """Upload a CSV for bulk prediction.

    The annotated CSV comes back as the body; the sentiment distribution
    chart, when the service renders one, rides along base64-encoded in the
    X-Graph-Data header.
    """
    logger.info("Requesting bulk prediction for %s", file.name)
    if hasattr(file.data, "seek"):
        file.data.seek(0)
    upload = {UPLOAD_FIELD: (file.name, file.data, file.content_type or CSV_MIME_TYPE)}
    response = session.post(endpoint, files=upload, timeout=timeout)
    _check_status(response)

    image = responses.decode_graph(response.headers.get(GRAPH_HEADER))

    content_type = response.headers.get("Content-Type", "")
    if not responses.is_csv(content_type):
        logger.warning("Bulk response had content type %r", content_type)
        raise ContentError(MESSAGES["not_csv"])

    download = CsvBlob(response.content, content_type)
    return BulkCompleted(MESSAGES["bulk_done"], download, image)


def new_session():
    return requests.Session()
