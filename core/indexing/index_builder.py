# Path: core/indexing/index_builder.py
# Purpose: Caption and embed uploaded images into the vector store while reporting progress.
# Layer: core/indexing.
# Details: Produces a lazy stream of ProgressEvents; each item is processed and written independently.

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator, List, Optional

from core.embedders.base import Embedder, usable_embedding
from core.errors import EnumerationError, IngestionInProgressError
from core.models.domain import ImageRecord, IndexEntry, ProgressEvent
from core.vector_store.base import VectorStore
from .captions import CaptionGenerator
from .scanner import ImageScanner

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IndexBuilder:
    """Ingestion pipeline: vision captioner, then text embedder, then vector store, one image at a time.

    Only one run may be active per builder. Images already present in the store are
    skipped without calling upstream services, which makes repeated runs idempotent
    and lets an abandoned run be resumed later.
    """

    def __init__(
        self,
        captioner: CaptionGenerator,
        embedder: Embedder,
        vector_store: VectorStore,
        scanner: Optional[ImageScanner] = None,
        throttle_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.captioner = captioner
        self.embedder = embedder
        self.vector_store = vector_store
        self.scanner = scanner
        self.throttle_seconds = throttle_seconds
        self._sleep = sleep
        self._clock = clock
        self._run_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._run_lock.locked()

    def run(self, images: Optional[Iterable[ImageRecord]] = None) -> Iterator[ProgressEvent]:
        """
        Process ``images`` (or everything the scanner finds) and yield progress events.

        The last event is always terminal: ``complete`` after the final item, or a single
        ``error`` event when the images cannot be enumerated. Per-image failures are logged
        and counted as processed without producing an index entry.

        External calls:
        - core/indexing/captions.py::CaptionGenerator.caption - describe each new image.
        - core/embedders/base.py::Embedder.embed_text - embed each caption.
        - core/vector_store/base.py::VectorStore.put - store completed entries.
        """

        if not self._run_lock.acquire(blocking=False):
            raise IngestionInProgressError("An ingestion run is already in progress.")
        try:
            yield from self._run(images)
        finally:
            self._run_lock.release()

    def _run(self, images: Optional[Iterable[ImageRecord]]) -> Iterator[ProgressEvent]:
        try:
            records = self._enumerate(images)
        except EnumerationError as exc:
            logger.error("Ingestion could not start: %s", exc)
            yield ProgressEvent(processed=0, total=0, error=True, message=str(exc))
            return

        total = len(records)
        processed = 0
        logger.info("Starting ingestion of %d images", total)
        try:
            for position, record in enumerate(records, start=1):
                called_upstream = False
                if self.vector_store.has(record.id):
                    logger.debug("Skipping already indexed image %s", record.id)
                else:
                    called_upstream = True
                    logger.info("Analyzing image %d/%d: %s", position, total, record.id)
                    entry = self.process_image(record)
                    if entry is not None:
                        self.vector_store.put(record.id, entry)
                        logger.info("Indexed %s", record.id)

                processed += 1
                yield ProgressEvent(processed=processed, total=total, current_file=record.id)

                if called_upstream and position < total and self.throttle_seconds > 0:
                    self._sleep(self.throttle_seconds)
        except Exception as exc:
            logger.exception("Ingestion aborted after %d/%d images", processed, total)
            yield ProgressEvent(processed=processed, total=total, error=True, message=str(exc))
            return

        logger.info("Ingestion finished: %d images, %d indexed", total, self.vector_store.size())
        yield ProgressEvent(processed=processed, total=total, complete=True)

    def process_image(self, record: ImageRecord) -> Optional[IndexEntry]:
        """Caption and embed one image; return None if either step fails."""

        try:
            image_bytes = record.read_bytes()
        except OSError as exc:
            logger.warning("Failed to read %s: %s", record.id, exc)
            return None

        caption = self.captioner.caption(image_bytes)
        if not caption.ok:
            logger.warning("Failed to analyze %s: %s", record.id, caption.reason)
            return None

        logger.debug("Creating embedding for %s", record.id)
        embedding = usable_embedding(self.embedder.embed_text(caption.value))
        if not embedding.ok:
            logger.warning("Failed to create embedding for %s: %s", record.id, embedding.reason)
            return None

        return IndexEntry(
            image_id=record.id,
            path=record.path,
            caption=caption.value,
            embedding=embedding.value,
            processed_at=self._clock(),
        )

    def _enumerate(self, images: Optional[Iterable[ImageRecord]]) -> List[ImageRecord]:
        if images is not None:
            return list(images)
        if self.scanner is None:
            raise EnumerationError("No images supplied and no scanner configured.")
        return self.scanner.scan()
