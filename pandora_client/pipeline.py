# pandora_client/pipeline.py
from __future__ import annotations
import logging
from typing import Iterable

import httpx

from .batching import batch_points
from .client import LogDBClient, _http_client
from .exceptions import PandoraError
from .points import Point, parse_records, serialize_points

log = logging.getLogger("pandora_client.pipeline")


class PipelineClient:
    """Posts serialized points to the ingestion endpoint, reusing the core client's retries.

    A transport injected into the core client is shared, not owned: ``close()``
    leaves it open for the core client. Pass ``transport`` to give this client
    its own.
    """

    def __init__(
        self,
        core: LogDBClient,
        pipeline_url: str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self.core = core
        self._owns_transport = transport is not None or core._transport is None
        self._client = _http_client(pipeline_url or core.cfg.pipeline_url, core.cfg, transport or core._transport)

    def close(self) -> None:
        if self._owns_transport:
            self._client.close()

    def __enter__(self) -> "PipelineClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def post_points(self, repo: str, points: Iterable[Point]) -> int:
        """Post points in size-bounded batches and return how many were sent.

        Batches are posted one at a time. If one fails, the batches before it
        have already been ingested; the raised error's ``sent`` attribute holds
        that count, so a caller can resume instead of re-posting everything.
        """
        sent = 0
        for batch in batch_points(points, self.core.cfg.max_batch_size):
            try:
                self.core._request(
                    "POST",
                    f"/v2/repos/{repo}/data",
                    content=serialize_points(batch).encode("utf-8"),
                    headers={"Content-Type": "text/plain"},
                    client=self._client,
                )
            except PandoraError as e:
                e.sent = sent
                log.warning("posting to %s failed after %d points: %s", repo, sent, e)
                raise
            sent += len(batch)
            log.debug("posted %d points to %s", len(batch), repo)
        log.info("posted %d points to %s", sent, repo)
        return sent

    def post_text(self, repo: str, text: str) -> int:
        return self.post_points(repo, parse_records(text, max_size=self.core.cfg.max_point_size))
