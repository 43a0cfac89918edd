# pandora_client/examples/ingest.py
from datetime import datetime

from pandora_client import LogDBClient, PipelineClient, Point, Settings, configure_logging, models as M
from pandora_client.exceptions import Conflict

REPO = "YOUR_REPO_NAME"

settings = Settings()
configure_logging(settings.log_level)
cfg = settings.to_client_config()
cli = LogDBClient(cfg)
pipe = PipelineClient(cli)

# 1) repo
spec = M.CreateRepoInput(
    region="nb",
    retention="7d",
    schema=[
        M.RepoSchemaEntry(key="host", valtype="string"),
        M.RepoSchemaEntry(key="latency", valtype="float"),
        M.RepoSchemaEntry(key="ok", valtype="boolean"),
        M.RepoSchemaEntry(key="timestamp", valtype="date"),
        M.RepoSchemaEntry(key="tags", valtype="array", elemtype="string"),
    ],
    full_text=M.FullText(enabled=True, analyzer="standard"),
    description="SDK ingest example",
)
try:
    cli.create_repo(REPO, spec)
except Conflict:
    print("repo exists, reusing", REPO)

# 2) points
points = []
for i in range(3):
    p = Point(max_size=cfg.max_point_size)
    p.append("host", f"web-{i}")
    p.append("latency", 12.5 * (i + 1))
    p.append("ok", i != 1)
    p.append("timestamp", datetime.now())
    p.append("tags", ["sdk", "example"])
    p.append("message", "line one\nline two")
    if p.is_too_large():
        continue
    points.append(p)

print(points[0].serialize(), end="")
print("Sent:", pipe.post_points(REPO, points))

pipe.close()
cli.close()
