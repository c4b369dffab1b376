import logging
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path

from sentiment_predictor.config import DOWNLOAD_FILENAME

logger = logging.getLogger(__name__)


@contextmanager
def transient_handle(blob):
    """In-memory handle over a CsvBlob, closed on every exit path."""
    handle = BytesIO(blob.data)
    try:
        yield handle
    finally:
        handle.close()


def trigger_download(blob, save, filename=DOWNLOAD_FILENAME):
    """Hand ``blob`` to the ``save(handle, filename)`` primitive once.

    The handle must not be kept by ``save``: it is closed as soon as the
    call returns or raises.
    """
    with transient_handle(blob) as handle:
        save(handle, filename)
    logger.info("Handed %d bytes to save action as %s", len(blob.data), filename)


def save_to_directory(directory):
    """Save primitive that writes the download into ``directory``."""
    directory = Path(directory)

    def save(handle, filename):
        directory.mkdir(parents=True, exist_ok=True)
        (directory / filename).write_bytes(handle.read())

    return save
