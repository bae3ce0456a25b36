"""
Adapter for the CSV business dataset on local storage.
"""
import csv
import logging
from typing import Any, Dict, List, Tuple

from leadgen.icp_engine.exceptions import DatasetLoadError


logger = logging.getLogger(__name__)

# DictReader stores surplus fields of a row under this key
_EXTRA_FIELDS = "__extra__"


class CSVDatasetAdapter:
    """Reads a header-row CSV file into a list of raw row dicts."""

    def __init__(self, config: Dict[str, Any]):
        """
        Args:
            config: {"path": str, "delimiter": ",", "encoding": "utf-8-sig"}
        """
        self.config = config
        self.path = config["path"]
        self.delimiter = config.get("delimiter", ",")
        self.encoding = config.get("encoding", "utf-8-sig")

    def read_table(self) -> Tuple[List[str], List[Dict[str, str]]]:
        """
        Parse the whole file into (header, rows).

        Blocking; callers on the event loop run it in a worker thread.

        Raises:
            DatasetLoadError: file missing/unreadable, no header row,
                or a row with more fields than the header
        """
        try:
            with open(self.path, newline="", encoding=self.encoding) as handle:
                reader = csv.DictReader(
                    handle,
                    delimiter=self.delimiter,
                    restkey=_EXTRA_FIELDS,
                    strict=True,
                )
                if not reader.fieldnames:
                    raise DatasetLoadError(self.path, "missing header row")

                rows = []
                for row in reader:
                    if _EXTRA_FIELDS in row:
                        raise DatasetLoadError(
                            self.path,
                            f"line {reader.line_num} has more fields than the header",
                        )
                    rows.append(row)
                logger.debug(f"Read {len(rows)} rows from {self.path}")
                return list(reader.fieldnames), rows
        except FileNotFoundError:
            raise DatasetLoadError(self.path, "file not found")
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DatasetLoadError(self.path, str(e)) from e

