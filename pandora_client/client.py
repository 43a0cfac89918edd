# pandora_client/client.py
from __future__ import annotations
from typing import Any, Iterable
import logging
import time
import httpx

from .config import ClientConfig
from .exceptions import (
    PandoraError, InvalidArgument, NotFound, Conflict, BadRequest, Unauthorized, TransportError, ServerError
)
from . import models as M

log = logging.getLogger("pandora_client.client")


def _http_client(base_url: str, cfg: ClientConfig, transport: httpx.BaseTransport | None) -> httpx.Client:
    headers = {"Authorization": cfg.api_key} if cfg.api_key else None
    return httpx.Client(base_url=base_url, timeout=cfg.timeout_s, headers=headers, transport=transport)


class LogDBClient:
    def __init__(self, config: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self.cfg = config
        self._transport = transport
        self._client = _http_client(config.base_url, config, transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LogDBClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------ low-level helpers ------------
    def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any | None = None,
        params: dict[str, Any] | None = None,
        content: str | bytes | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
    ) -> httpx.Response:
        http = client or self._client
        tries = max(1, self.cfg.retries + 1)
        last_exc: Exception | None = None
        for attempt in range(tries):
            try:
                resp = http.request(method, url, json=json, params=params, content=content, headers=headers)
                # Map common HTTP errors
                if resp.status_code >= 500:
                    raise ServerError(f"HTTP {resp.status_code}: {resp.text}", resp.status_code)
                if resp.status_code == 404:
                    raise NotFound(resp.text, 404)
                if resp.status_code == 409:
                    raise Conflict(resp.text, 409)
                if resp.status_code in (401, 403):
                    raise Unauthorized(resp.text, resp.status_code)
                if resp.status_code in (400, 422):
                    raise BadRequest(resp.text, resp.status_code)
                if resp.status_code >= 400:
                    raise PandoraError(f"HTTP {resp.status_code}: {resp.text}", resp.status_code)
                return resp
            except (httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError) as e:
                last_exc = e
                if attempt < tries - 1:
                    log.warning("%s %s failed (%s), retrying", method, url, e)
                    time.sleep(0.25 * (2 ** attempt))
                    continue
                raise TransportError(str(e)) from e
            except ServerError as e:
                if attempt < tries - 1:
                    log.warning("%s %s failed (%s), retrying", method, url, e)
                    time.sleep(0.5 * (2 ** attempt))
                    continue
                raise
        assert False, f"unreachable: {last_exc}"

    # ------------ Repos ------------
    def create_repo(self, name: str, spec: M.CreateRepoInput) -> None:
        self._request("POST", f"/v5/repos/{name}", json=spec.to_wire())
        log.info("created repo %s", name)

    def get_repo(self, name: str) -> M.Repo:
        r = self._request("GET", f"/v5/repos/{name}")
        return M.Repo(**r.json())

    def list_repos(self) -> list[M.Repo]:
        r = self._request("GET", "/v5/repos")
        body = r.json()
        rows = body.get("repos", []) if isinstance(body, dict) else body
        return [M.Repo(**x) for x in rows]

    def delete_repo(self, name: str) -> None:
        self._request("DELETE", f"/v5/repos/{name}")
        log.info("deleted repo %s", name)

    # ------------ Search ------------
    def search(self, repo: str, req: M.SearchRequest) -> M.SearchResult:
        r = self._request("GET", f"/v5/repos/{repo}/search", params=req.to_params())
        return M.SearchResult(**r.json())

    def scroll(self, repo: str, req: M.ScrollRequest) -> M.SearchResult:
        r = self._request("POST", f"/v5/repos/{repo}/scroll", json=req.model_dump())
        return M.SearchResult(**r.json())

    def multi_search(self, requests: Iterable[M.MultiSearchRequest]) -> M.MultiSearchResult:
        body = "".join(req.to_ndjson() for req in requests)
        if not body:
            raise InvalidArgument("multi_search needs at least one request")
        r = self._request(
            "POST",
            "/v5/logdbkibana/msearch",
            content=body,
            headers={"Content-Type": "application/x-ndjson"},
        )
        return M.MultiSearchResult(**r.json())

    def partial_search(self, repo: str, req: M.PartialSearchRequest) -> M.PartialSearchResult:
        r = self._request("POST", f"/v5/repos/{repo}/s", json=req.to_wire())
        return M.PartialSearchResult(**r.json())
