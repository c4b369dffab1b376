"""Orchestration of the single-text and bulk-CSV prediction flows.

Both flows share one ``PredictorState``. Its ``phase`` is the only busy flag:
a submission moves it from ``IDLE`` to the flow's own phase and a ``finally``
block moves it back, so every exit path, including unexpected exceptions,
leaves the predictor idle again.
"""

import logging
from contextlib import contextmanager

import requests

from sentiment_predictor import api
from sentiment_predictor.config import MESSAGES, PREDICTION_ENDPOINT, REQUEST_TIMEOUT
from sentiment_predictor.download import trigger_download
from sentiment_predictor.errors import (
    InputValidationError,
    PredictionError,
    SubmissionInProgress,
)
from sentiment_predictor.state import FileInput, Phase, PredictorState

logger = logging.getLogger(__name__)


class SentimentPredictor:
    def __init__(self, session=None, endpoint=PREDICTION_ENDPOINT, timeout=REQUEST_TIMEOUT, on_phase_change=None):
        self.session = session if session is not None else api.new_session()
        self.endpoint = endpoint
        self.timeout = timeout
        self.state = PredictorState()
        # Called with the state whenever a submission starts or finishes.
        self.on_phase_change = on_phase_change

    def _set_phase(self, phase):
        self.state.phase = phase
        if self.on_phase_change is not None:
            self.on_phase_change(self.state)

    # --- Staging ---

    def set_text(self, text):
        self.state.stage_text(text)

    def select_file(self, name, data, content_type=None):
        """Stage a CSV upload. Returns False if the file is not a CSV."""
        file = FileInput(name, data, content_type)
        if not file.looks_like_csv():
            logger.info("Rejected upload %s (%s)", name, content_type)
            self.state.set_error(MESSAGES["invalid_file"])
            return False
        self.state.stage_file(file)
        return True

    def clear_file(self):
        """Forget the staged file, e.g. after it was removed from the uploader."""
        self.state.clear_file()

    def reset(self):
        self.state.reset()

    # --- Submission ---

    def _ensure_idle(self):
        if self.state.busy:
            raise SubmissionInProgress(f"{self.state.phase.value} already running")

    @contextmanager
    def _submitting(self, phase, fallback):
        self.state.error = None
        self.state.result = None
        self.state.image = None
        self._set_phase(phase)
        try:
            yield
        except (PredictionError, requests.RequestException) as exc:
            logger.warning("Prediction failed: %s", exc)
            message = str(exc)
            self.state.set_error(f"Error: {message}" if message else fallback)
        finally:
            self._set_phase(Phase.IDLE)

    def _require_text(self, text):
        text = self.state.text if text is None else text
        if not text.strip():
            raise InputValidationError(MESSAGES["empty_text"])
        return text

    def _require_file(self, file):
        file = self.state.file if file is None else file
        if file is None:
            raise InputValidationError(MESSAGES["missing_file"])
        return file

    def submit_text(self, text=None):
        """Predict the sentiment of ``text`` (default: the staged text)."""
        self._ensure_idle()
        try:
            text = self._require_text(text)
        except InputValidationError as exc:
            self.state.set_error(str(exc))
            return None

        outcome = None
        self.state.download = None
        with self._submitting(Phase.SUBMITTING_TEXT, MESSAGES["text_failed"]):
            outcome = api.predict_text(self.session, text, self.endpoint, self.timeout)
            self.state.result = outcome
        return outcome

    def submit_file(self, file=None):
        """Run bulk prediction on ``file`` (default: the staged file)."""
        self._ensure_idle()
        try:
            file = self._require_file(file)
        except InputValidationError as exc:
            self.state.set_error(str(exc))
            return None

        outcome = None
        with self._submitting(Phase.SUBMITTING_BULK, MESSAGES["file_failed"]):
            outcome = api.predict_file(self.session, file, self.endpoint, self.timeout)
            self.state.download = outcome.download
            self.state.image = outcome.image
            self.state.result = outcome
        return outcome

    # --- Download ---

    def download(self, save):
        if self.state.download is None:
            return False
        trigger_download(self.state.download, save)
        return True
