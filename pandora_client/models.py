# pandora_client/models.py
from __future__ import annotations
import json
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

Retention = str  # e.g. "7d", "30d"


class _Wire(BaseModel):
    """Models whose JSON uses camelCase names on the wire."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# -------- Repos --------
class RepoSchemaEntry(_Wire):
    key: str
    valtype: str                          # string, long, float, date, boolean, ip, geo_point, object, array
    analyzer: str | None = None
    primary: bool | None = None
    elemtype: str | None = None          # element type when valtype is an array
    schema_: list["RepoSchemaEntry"] | None = Field(default=None, alias="schema")  # nested object fields

class FullText(_Wire):
    enabled: bool = False
    analyzer: str | None = None

class CreateRepoInput(_Wire):
    region: str
    retention: Retention
    schema_: list[RepoSchemaEntry] = Field(default_factory=list, alias="schema")
    primary_field: str | None = Field(default=None, alias="primaryField")
    full_text: FullText | None = Field(default=None, alias="fullText")
    description: str | None = None

class Repo(_Wire):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    region: str | None = None
    retention: Retention | None = None
    schema_: list[RepoSchemaEntry] = Field(default_factory=list, alias="schema")
    primary_field: str | None = Field(default=None, alias="primaryField")
    full_text: FullText | None = Field(default=None, alias="fullText")
    description: str | None = None
    create_time: str | None = Field(default=None, alias="createTime")
    update_time: str | None = Field(default=None, alias="updateTime")

# -------- Search --------
class Highlight(BaseModel):
    pre_tags: list[str] = Field(default_factory=lambda: ["<em>"])
    post_tags: list[str] = Field(default_factory=lambda: ["</em>"])
    fields: dict[str, dict[str, Any]] = Field(default_factory=dict)
    require_field_match: bool = False
    fragment_size: int = 100

class SearchRequest(BaseModel):
    query_string: str = "*"
    sort: str | None = None
    from_: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=0)
    fields: str | None = None
    scroll: str | None = None            # keep-alive such as "1m"; enables scrolling
    highlight: Highlight | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"q": self.query_string, "from": self.from_, "size": self.size}
        if self.sort:
            params["sort"] = self.sort
        if self.fields:
            params["fields"] = self.fields
        if self.scroll:
            params["scroll"] = self.scroll
        if self.highlight is not None:
            params["highlight"] = self.highlight.model_dump_json()
        return params

class SearchResult(_Wire):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    total: int = 0
    partial_success: bool = Field(default=False, alias="partialSuccess")
    data: list[dict[str, Any]] = Field(default_factory=list)
    scroll_id: str | None = None

    def has_more(self) -> bool:
        return bool(self.data) and bool(self.scroll_id)

class ScrollRequest(BaseModel):
    scroll: str = "1m"
    scroll_id: str

# -------- Multi search --------
class MultiSearchRequest(BaseModel):
    body: str | dict[str, Any]           # opaque query passed through as-is
    repo: str

    def to_ndjson(self) -> str:
        header = json.dumps({"index": [self.repo]}, separators=(",", ":"))
        body = self.body if isinstance(self.body, str) else json.dumps(self.body, separators=(",", ":"))
        return f"{header}\n{body}\n"

class MultiSearchResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    responses: list[dict[str, Any]] = Field(default_factory=list)

# -------- Partial search --------
class PartialSearchRequest(_Wire):
    query_string: str = "*"
    size: int = Field(default=10, ge=0)
    sort: str | None = None
    start_time: int = Field(alias="startTime")   # epoch millis
    end_time: int = Field(alias="endTime")
    pre_tag: str | None = None           # shorthand for highlight.pre_tags == [pre_tag]
    post_tag: str | None = None
    highlight: Highlight | None = None
    search_type: int | None = Field(default=None, alias="searchType")

    def to_wire(self) -> dict[str, Any]:
        body = self.model_dump(by_alias=True, exclude_none=True, exclude={"pre_tag", "post_tag", "highlight"})
        hl = self.highlight.model_dump() if self.highlight is not None else {}
        if self.pre_tag is not None:
            hl["pre_tags"] = [self.pre_tag]
        if self.post_tag is not None:
            hl["post_tags"] = [self.post_tag]
        if hl:
            body["highlight"] = hl
        return body

class PartialSearchResult(_Wire):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hits: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    took: int = 0
    process: float = 0.0
    partial_success: bool = Field(default=False, alias="partialSuccess")
    buckets: Optional[list[dict[str, Any]]] = None

RepoSchemaEntry.model_rebuild()
