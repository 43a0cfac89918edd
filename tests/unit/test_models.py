from __future__ import annotations

import json

from pandora_client import models as M


def test_create_repo_input_uses_wire_names():
    spec = M.CreateRepoInput(
        region="nb",
        retention="7d",
        schema=[M.RepoSchemaEntry(key="host", valtype="string")],
        primary_field="host",
        full_text=M.FullText(enabled=True, analyzer="standard"),
    )
    body = spec.to_wire()
    assert body == {
        "region": "nb",
        "retention": "7d",
        "schema": [{"key": "host", "valtype": "string"}],
        "primaryField": "host",
        "fullText": {"enabled": True, "analyzer": "standard"},
    }


def test_repo_parses_server_shape():
    repo = M.Repo(**{
        "region": "nb",
        "retention": "30d",
        "schema": [{"key": "obj", "valtype": "object", "schema": [{"key": "x", "valtype": "long"}]}],
        "fullText": {"enabled": False},
        "createTime": "2018-06-11T10:00:00Z",
    })
    assert repo.schema_[0].schema_[0].key == "x"
    assert repo.full_text.enabled is False
    assert repo.create_time == "2018-06-11T10:00:00Z"


def test_search_request_params():
    req = M.SearchRequest(query_string="host:web", sort="timestamp", size=5, scroll="1m",
                          highlight=M.Highlight(fields={"a": {}}))
    params = req.to_params()
    assert params["q"] == "host:web"
    assert params["from"] == 0
    assert params["size"] == 5
    assert params["sort"] == "timestamp"
    assert params["scroll"] == "1m"
    hl = json.loads(params["highlight"])
    assert hl["pre_tags"] == ["<em>"]
    assert hl["fields"] == {"a": {}}


def test_search_request_omits_unset_params():
    assert M.SearchRequest().to_params() == {"q": "*", "from": 0, "size": 10}


def test_search_result_has_more():
    ret = M.SearchResult(**{"total": 2, "partialSuccess": False, "data": [{"a": "1"}], "scroll_id": "abc"})
    assert ret.has_more()
    assert not M.SearchResult(data=[], scroll_id="abc").has_more()
    assert not M.SearchResult(data=[{"a": 1}], scroll_id="").has_more()


def test_multi_search_request_ndjson():
    as_dict = M.MultiSearchRequest(body={"size": 1}, repo="r1").to_ndjson()
    as_str = M.MultiSearchRequest(body='{"size":1}', repo="r1").to_ndjson()
    assert as_dict == as_str == '{"index":["r1"]}\n{"size":1}\n'


def test_partial_search_request_body():
    req = M.PartialSearchRequest(query_string="*", size=1, sort="timestamp",
                                 start_time=1000, end_time=2000, pre_tag="@a@", post_tag="@/a@")
    assert req.to_wire() == {
        "query_string": "*",
        "size": 1,
        "sort": "timestamp",
        "startTime": 1000,
        "endTime": 2000,
        "highlight": {"pre_tags": ["@a@"], "post_tags": ["@/a@"]},
    }


def test_partial_search_request_highlight_model():
    req = M.PartialSearchRequest(start_time=1, end_time=2, highlight=M.Highlight(fields={"msg": {}}), post_tag="@/x@")
    hl = req.to_wire()["highlight"]
    assert hl["pre_tags"] == ["<em>"]
    assert hl["post_tags"] == ["@/x@"]
    assert hl["fields"] == {"msg": {}}
    assert "highlight" not in M.PartialSearchRequest(start_time=1, end_time=2).to_wire()


def test_partial_search_result_parses():
    ret = M.PartialSearchResult(**{"hits": [{"a": 1}], "total": 1, "partialSuccess": True, "process": 0.5, "took": 3})
    assert ret.partial_success
    assert ret.process == 0.5
