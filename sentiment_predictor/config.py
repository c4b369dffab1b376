import logging
import os

# Default address of a locally running /predict service.
PREDICTION_ENDPOINT = os.getenv("SENTIMENT_API_URL", "http://127.0.0.1:5000/predict")

# Seconds; unset means requests waits forever.
_timeout = os.getenv("SENTIMENT_API_TIMEOUT")
REQUEST_TIMEOUT = float(_timeout) if _timeout else None

LOG_LEVEL = os.getenv("SENTIMENT_LOG_LEVEL", "INFO")

# --- Wire names ---
GRAPH_HEADER = "X-Graph-Data"
GRAPH_MIME_TYPE = "image/png"
UPLOAD_FIELD = "file"
CSV_MIME_TYPE = "text/csv"
DOWNLOAD_FILENAME = "Predictions.csv"
PREDICTION_COLUMN = "Predicted sentiment"

# --- User-facing messages ---
MESSAGES = {
    "empty_text": "Please enter some text to analyze",
    "missing_file": "Please upload a CSV file first",
    "invalid_file": "Please upload a valid CSV file",
    "not_csv": "Server did not return a CSV file",
    "not_json": "Server did not return valid JSON",
    "bulk_done": "Bulk prediction completed! Download your results below.",
    "text_failed": "Something went wrong while processing your request",
    "file_failed": "Something went wrong while processing the file",
    "unknown_label": "Unknown",
}


def configure_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
