"""
In-memory cache of the business dataset.

The dataset is read from storage once per process. Concurrent callers that
arrive while the read is in flight wait on the same load instead of
starting another one. A failed load leaves nothing cached.
"""
import asyncio
import logging
from typing import Optional, Sequence, Tuple

from leadgen.icp_engine.adapters import CSVDatasetAdapter
from leadgen.icp_engine.core.field_mapper import FieldMapper
from leadgen.icp_engine.records import BusinessRecord


logger = logging.getLogger(__name__)


class BusinessDatasetCache:
    """
    Owns the loaded dataset and the single in-flight load.

    Hand one instance to every consumer (see leadgen.dependencies);
    it is not a module-level global.
    """

    def __init__(
        self,
        path: str,
        field_mapper: Optional[FieldMapper] = None,
        adapter: Optional[CSVDatasetAdapter] = None,
    ):
        """
        Args:
            path: Location of the CSV dataset
            field_mapper: Column mapping (defaults to the standard dataset columns)
            adapter: Reader for the file (defaults to a CSV adapter on `path`)
        """
        self.path = path
        self.field_mapper = field_mapper or FieldMapper()
        self.adapter = adapter or CSVDatasetAdapter({"path": path})

        self._records: Optional[Tuple[BusinessRecord, ...]] = None
        self._pending: Optional[asyncio.Future] = None

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    async def load(self) -> Sequence[BusinessRecord]:
        """
        Return the dataset, reading it on first use.

        Returns:
            The same tuple of records for every caller

        Raises:
            DatasetLoadError: propagated to every caller of the failed load
        """
        if self._records is not None:
            return self._records

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._load())

        # Shielded so a cancelled caller does not cancel the shared load
        return await asyncio.shield(self._pending)

    async def _load(self) -> Tuple[BusinessRecord, ...]:
        try:
            header, rows = await asyncio.to_thread(self.adapter.read_table)

            missing = self.field_mapper.missing_columns(header)
            if missing:
                logger.warning(
                    f"Business dataset {self.path} has no column(s) {missing}; "
                    f"those fields will be empty"
                )

            records = tuple(self.field_mapper.map_batch(rows))
            self._records = records
            logger.info(f"✅ Loaded business dataset with {len(records)} rows")
            return records
        except Exception as e:
            logger.error(f"❌ Failed to load dataset: {e}")
            raise
        finally:
            self._pending = None
