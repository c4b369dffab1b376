"""Staged input, outcome types and the state shared by both submission flows."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from typing import BinaryIO, Optional, Union

import pandas as pd

from sentiment_predictor.config import CSV_MIME_TYPE, GRAPH_MIME_TYPE, PREDICTION_COLUMN


@dataclass(frozen=True)
class FileInput:
    name: str
    data: BinaryIO
    content_type: Optional[str] = None

    def looks_like_csv(self):
        return self.content_type == CSV_MIME_TYPE or self.name.endswith(".csv")


@dataclass(frozen=True)
class ImageData:
    data: bytes
    mime_type: str = GRAPH_MIME_TYPE

    @property
    def data_uri(self):
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class CsvBlob:
    data: bytes
    content_type: str = CSV_MIME_TYPE

    def to_frame(self):
        return pd.read_csv(BytesIO(self.data))

    def sentiment_counts(self, column=PREDICTION_COLUMN):
        """Frequency of each predicted class, or None if the column is missing."""
        frame = self.to_frame()
        if column not in frame.columns:
            return None
        return frame[column].value_counts()


@dataclass(frozen=True)
class Label:
    value: str


@dataclass(frozen=True)
class BulkCompleted:
    message: str
    download: CsvBlob
    image: Optional[ImageData] = None


PredictionOutcome = Union[Label, BulkCompleted]


class Phase(Enum):
    IDLE = "idle"
    SUBMITTING_TEXT = "submitting_text"
    SUBMITTING_BULK = "submitting_bulk"


@dataclass
class PredictorState:
    text: str = ""
    file: Optional[FileInput] = None
    phase: Phase = Phase.IDLE
    error: Optional[str] = None
    result: Optional[PredictionOutcome] = None
    download: Optional[CsvBlob] = None
    image: Optional[ImageData] = None
    # Bumped on reset so the page can hand its file widget a fresh key.
    uploader_generation: int = field(default=0)

    @property
    def busy(self):
        return self.phase is not Phase.IDLE

    @property
    def file_name(self):
        return self.file.name if self.file is not None else ""

    def clear_outputs(self):
        self.result = None
        self.error = None
        self.download = None
        self.image = None

    def stage_text(self, text):
        self.text = text
        self.clear_outputs()

    def stage_file(self, file):
        self.file = file
        self.clear_outputs()

    def clear_file(self):
        self.file = None
        self.clear_outputs()

    def set_error(self, message):
        self.error = message
        self.result = None

    def reset(self):
        self.text = ""
        self.file = None
        self.clear_outputs()
        self.uploader_generation += 1
