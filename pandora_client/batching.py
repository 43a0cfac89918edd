# pandora_client/batching.py
from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .config import DEFAULT_MAX_BATCH_SIZE
from .exceptions import InvalidArgument
from .points import Point

log = logging.getLogger("pandora_client.batching")


def batch_points(points: Iterable[Point], max_bytes: int = DEFAULT_MAX_BATCH_SIZE) -> Iterator[list[Point]]:
    """
    Group points into ingestion payloads of at most ``max_bytes`` serialized bytes.

    Order is preserved. Empty points are skipped, and so are points whose
    ``is_too_large()`` is true, since the ingestion service rejects them.
    A batch only exceeds ``max_bytes`` when it holds a single point.
    """
    if max_bytes <= 0:
        raise InvalidArgument("max_bytes must be positive")

    batch: list[Point] = []
    batch_size = 0
    for i, p in enumerate(points):
        if not len(p):
            continue
        if p.is_too_large():
            log.warning("skipping point #%d: %d bytes >= limit %d", i, p.byte_size(), p.max_size)
            continue
        if batch and batch_size + p.byte_size() > max_bytes:
            yield batch
            batch, batch_size = [], 0
        batch.append(p)
        batch_size += p.byte_size()
    if batch:
        yield batch
