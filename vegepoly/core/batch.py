"""
Batch driver: runs the per-polygon pipeline over many rows.

Rows may be sampled on a worker pool, but results are consumed in row order
on the calling thread. That thread is the only one that touches the progress
state and the sink, so the sampler itself needs no locking.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

import structlog

from ..config import Settings
from ..config.vegetation_settings import VegetationParams, vegetation_label
from ..export import PointSink
from ..utils.random import derive_rng
from .pipeline import PolygonSamplingResult, distribute_points_in_polygon
from .wkt_parser import GeometryError

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProgressInfo:
    """Consistent view of a batch's progress."""
    current_row: int
    total_rows: int
    created_items: int
    errors: Tuple[str, ...] = field(default=())
    is_finished: bool = False


class ProcessingState:
    """
    Counters for a running batch behind a single lock.

    ``record_row`` updates the row count, created count and error list in one
    step, so a snapshot never mixes counters from different rows.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._processed_rows = 0
        self._total_rows = 0
        self._created_items = 0
        self._errors: List[str] = []
        self._finished = False

    def initialize(self, total_rows: int) -> None:
        with self._lock:
            self._processed_rows = 0
            self._total_rows = total_rows
            self._created_items = 0
            self._errors = []
            self._finished = False

    def record_row(self, created: int = 0, error: Optional[str] = None) -> None:
        with self._lock:
            self._processed_rows += 1
            self._created_items += created
            if error is not None:
                self._errors.append(error)

    def set_finished(self) -> None:
        with self._lock:
            self._finished = True

    def snapshot(self) -> ProgressInfo:
        with self._lock:
            return ProgressInfo(
                current_row=self._processed_rows,
                total_rows=self._total_rows,
                created_items=self._created_items,
                errors=tuple(self._errors),
                is_finished=self._finished,
            )


ProgressCallback = Callable[[ProgressInfo], None]


class BatchProcessor:
    """Runs the vegetation pipeline over a sequence of geometry rows."""

    def __init__(self, settings: Settings, state: Optional[ProcessingState] = None):
        self.settings = settings
        self.state = state or ProcessingState()

    def _run_row(self, row_index: int, row: str, params: VegetationParams):
        """Sample one row. Returns a result or the parse error message."""
        if "POLYGON" not in row:
            return None, f"No polygon data in row {row_index}"

        rng = derive_rng(self.settings.random_seed, row_index)
        try:
            result = distribute_points_in_polygon(
                row,
                params,
                rng,
                max_attempts=self.settings.max_attempts,
                seed_attempts=self.settings.seed_attempts,
            )
        except GeometryError as e:
            return None, f"Error at row {row_index}: {e}"
        return result, None

    def process(
        self,
        rows: Iterable[str],
        params: VegetationParams,
        sink: Optional[PointSink] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ProgressInfo:
        """
        Generate vegetation for every row.

        A row that fails to parse is recorded as an error and the batch goes
        on. A polygon that yields no points counts as a success.

        Args:
            rows: Geometry rows; blank rows are skipped
            params: Vegetation parameters shared by all rows
            sink: Receives each row's points with ``params.type_value``
            progress_callback: Called with a snapshot after every row and at the end
            cancel_event: When set, processing stops before the next row

        Returns:
            Final progress snapshot
        """
        work = [row for row in rows if row.strip()]
        self.state.initialize(len(work))
        label = vegetation_label(params.vegetation_type)
        start = time.monotonic()

        logger.info("Starting batch", rows=len(work), vegetation=label,
                    workers=self.settings.batch_workers)

        def notify():
            if progress_callback is not None:
                progress_callback(self.state.snapshot())

        def handle(row_index: int, result: Optional[PolygonSamplingResult], error: Optional[str]):
            if error is not None:
                logger.warning("Row failed", row=row_index, error=error)
                self.state.record_row(error=error)
            else:
                if sink is not None:
                    sink.write_points(result.points, params.type_value)
                self.state.record_row(created=len(result.points))
                logger.info(
                    f"Row [{row_index + 1}/{len(work)}] {len(result.points)} points of {label} generated"
                )
            notify()

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        try:
            if self.settings.batch_workers <= 1:
                for row_index, row in enumerate(work):
                    if cancelled():
                        logger.info("Batch cancelled", row=row_index)
                        break
                    handle(row_index, *self._run_row(row_index, row, params))
            else:
                with ThreadPoolExecutor(max_workers=self.settings.batch_workers) as executor:
                    futures = [
                        executor.submit(self._run_row, row_index, row, params)
                        for row_index, row in enumerate(work)
                    ]
                    try:
                        for row_index, future in enumerate(futures):
                            if cancelled():
                                logger.info("Batch cancelled", row=row_index)
                                break
                            handle(row_index, *future.result())
                    finally:
                        # Rows not yet started are dropped on cancel or failure
                        for pending in futures:
                            pending.cancel()
        finally:
            self.state.set_finished()
            notify()

        final = self.state.snapshot()
        logger.info("Batch complete", rows=final.current_row, created=final.created_items,
                    errors=len(final.errors), seconds=round(time.monotonic() - start, 2))
        return final
