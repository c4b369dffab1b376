from dataclasses import dataclass
from typing import Optional

from sentiment_predictor.state import BulkCompleted, Label, Phase

BUSY_LABELS = {
    Phase.SUBMITTING_TEXT: "Analyzing...",
    Phase.SUBMITTING_BULK: "Processing Bulk Prediction...",
}


@dataclass(frozen=True)
class Presentation:
    status: str
    indicator: str
    error: Optional[str]
    result: Optional[str]
    image_uri: Optional[str]
    file_label: str
    text_button: str
    bulk_button: str
    can_submit_text: bool
    can_submit_file: bool
    can_download: bool
    can_clear: bool

    @property
    def status_line(self):
        return f":{self.indicator}[●] {self.status}"


def _result_text(result):
    if isinstance(result, Label):
        return result.value
    if isinstance(result, BulkCompleted):
        return result.message
    return None


def present(state):
    """Project a PredictorState into what the page shows. No side effects."""
    if state.busy:
        status, indicator = "Processing...", "orange"
    elif state.error:
        status, indicator = "Connection error", "red"
    else:
        status, indicator = "Ready to analyze sentiment", "green"

    has_file = state.file is not None
    return Presentation(
        status=status,
        indicator=indicator,
        error=state.error,
        result=None if state.error else _result_text(state.result),
        image_uri=state.image.data_uri if state.image is not None else None,
        file_label=state.file_name if has_file else "Choose a CSV file or drag and drop",
        text_button=BUSY_LABELS[Phase.SUBMITTING_TEXT] if state.busy else "Predict Sentiment",
        bulk_button=BUSY_LABELS[Phase.SUBMITTING_BULK] if state.busy else "Predict Bulk Sentiment",
        # The text arrives together with the form submission; blank text is
        # rejected by the predictor, not by disabling the button.
        can_submit_text=not state.busy,
        can_submit_file=has_file and not state.busy,
        can_download=state.download is not None,
        can_clear=bool(state.text or has_file or state.result or state.error),
    )
