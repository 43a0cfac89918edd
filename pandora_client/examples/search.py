# pandora_client/examples/search.py
import time
from datetime import datetime, timedelta

from pandora_client import ClientConfig, LogDBClient, Settings, configure_logging, models as M
from pandora_client.exceptions import PandoraError

REPO = "YOUR_REPO_NAME"

settings = Settings()
configure_logging(settings.log_level)
cfg: ClientConfig = settings.to_client_config()
cli = LogDBClient(cfg)

# 1) search with highlighting
hl = M.Highlight(pre_tags=["<em>"], post_tags=["</em>"], fields={"a": {}}, fragment_size=100)
try:
    ret = cli.search(REPO, M.SearchRequest(query_string="*", sort="field", size=1, highlight=hl))
    print("Search:", ret.total, ret.data)
except PandoraError as e:
    print("search failed:", e)

# 2) msearch with opaque bodies
body1 = {
    "size": 1,
    "sort": [{"timestamp": {"order": "desc", "unmapped_type": "boolean"}}],
    "query": {"query_string": {"query": "Appid: 1380665431", "analyze_wildcard": True}},
    "aggs": {"2": {"date_histogram": {"field": "timestamp", "interval": "60s", "min_doc_count": 0}}},
}
body2 = '{"size":1,"query":{"query_string":{"query":"*"}}}'
try:
    res = cli.multi_search([M.MultiSearchRequest(body=body1, repo=REPO), M.MultiSearchRequest(body=body2, repo=REPO)])
    print("MultiSearch:", res.responses)
except PandoraError as e:
    print("msearch failed:", e)

# 3) scroll; the caller drives the loop and caps it
try:
    ret = cli.search(REPO, M.SearchRequest(query_string="*", size=10, scroll="1m"))
    count = 1
    while ret.has_more() and count <= 100:
        print(f"scroll page {count}:", len(ret.data))
        ret = cli.scroll(REPO, M.ScrollRequest(scroll="1m", scroll_id=ret.scroll_id))
        count += 1
except PandoraError as e:
    print("scroll failed:", e)

# 4) partial search; re-issue while the service reports partial results
end = datetime.now()
start = end - timedelta(days=30)
req = M.PartialSearchRequest(
    query_string="*",
    size=1,
    sort="timestamp",
    start_time=int(start.timestamp() * 1000),
    end_time=int(end.timestamp() * 1000),
    pre_tag="@hello@",
    post_tag="@hello/@",
)
try:
    ret = cli.partial_search(REPO, req)
    print("Partial:", ret.process, ret.hits[:1])
    while ret.partial_success:
        time.sleep(5)
        ret = cli.partial_search(REPO, req)
        for hit in ret.hits[:1]:
            for key, frags in (hit.get("highlight") or {}).items():
                print("Key =", key, ", Value =", frags)
        print("Partial:", ret.process)
except PandoraError as e:
    print("partial search failed:", e)

cli.close()
