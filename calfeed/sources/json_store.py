"""Record store backed by exported JSON collections."""

import json
import logging
from pathlib import Path

from calfeed.constants import EVENTS_FILENAME, MEETINGS_FILENAME
from calfeed.sources.base import RawDocument

logger = logging.getLogger(__name__)


class JSONRecordStore:
    """Reads ``events.json`` and ``meetings.json`` from a data directory.

    Supports two layouts per file:
    - Array of documents: [{doc1}, {doc2}, ...]
    - Object keyed by collection name: {"events": [...]} / {"meetings": [...]}

    A missing file is an empty collection. An unreadable or malformed file
    raises, which fails the whole request upstream.
    """

    def __init__(
        self,
        data_dir: Path,
        events_filename: str = EVENTS_FILENAME,
        meetings_filename: str = MEETINGS_FILENAME,
    ):
        self.data_dir = Path(data_dir)
        self.events_path = self.data_dir / events_filename
        self.meetings_path = self.data_dir / meetings_filename

    def list_events(self) -> list[RawDocument]:
        return self._read(self.events_path, "events")

    def list_meetings(self) -> list[RawDocument]:
        return self._read(self.meetings_path, "meetings")

    def _read(self, path: Path, collection: str) -> list[RawDocument]:
        if not self.data_dir.is_dir():
            raise FileNotFoundError(f"Data directory not found: {self.data_dir}")
        if not path.exists():
            logger.info(f"No {collection} file at {path}, treating as empty")
            return []

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict) and collection in data:
            data = data[collection]
        if not isinstance(data, list):
            raise ValueError(
                f"{path} must contain a list of {collection} "
                f"or an object with a '{collection}' key"
            )
        logger.debug(f"Read {len(data)} {collection} from {path}")
        return data
