#!/usr/bin/env python
"""Bulk load newline-delimited point records into a repo via the SDK.

Usage:
    python scripts/load_points.py \
        --repo my_repo \
        --data-file data/points.txt \
        --max-point-size 1048576
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pandora_client import LogDBClient, PipelineClient, Point, Settings, configure_logging, parse_records
from pandora_client.exceptions import PandoraError

log = logging.getLogger("pandora_client.scripts.load_points")


def parse_args() -> argparse.Namespace:
    root = Path(__file__).resolve().parent.parent
    default_data = root / "data" / "points.txt"

    parser = argparse.ArgumentParser(
        description="Bulk load tab/newline delimited point records into a repo."
    )
    parser.add_argument(
        "--repo",
        required=True,
        help="Target repo name",
    )
    parser.add_argument(
        "--data-file",
        default=str(default_data),
        help="Path to a file of key=value<TAB>key=value records, one per line (default: %(default)s)",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="LogDB API base URL (default: PANDORA_BASE_URL or built-in)",
    )
    parser.add_argument(
        "--pipeline-url",
        default=None,
        help="Ingestion API base URL (default: PANDORA_PIPELINE_URL or built-in)",
    )
    parser.add_argument(
        "--max-point-size",
        type=int,
        default=None,
        help="Skip records at or above this many serialized bytes (default: PANDORA_MAX_POINT_SIZE)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report without sending anything",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file",
    )
    return parser.parse_args()


def load_points(path: Path, max_size: int) -> list[Point]:
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    return parse_records(path.read_text(encoding="utf-8"), max_size=max_size)


def main() -> None:
    args = parse_args()
    overrides = {
        k: v for k, v in {
            "base_url": args.base_url,
            "pipeline_url": args.pipeline_url,
            "max_point_size": args.max_point_size,
        }.items() if v is not None
    }
    settings = Settings(**overrides)
    configure_logging(settings.log_level, Path(args.log_file) if args.log_file else None)
    cfg = settings.to_client_config()

    data_file = Path(args.data_file)
    points = load_points(data_file, cfg.max_point_size)
    if not points:
        raise RuntimeError(f"No records found in {data_file}")

    oversized = sum(1 for p in points if p.is_too_large())
    total_bytes = sum(p.byte_size() for p in points)
    log.info(
        "parsed %d records (%d bytes, %d oversized) from %s",
        len(points), total_bytes, oversized, data_file,
    )
    if args.dry_run:
        return

    with LogDBClient(cfg) as cli, PipelineClient(cli) as pipe:
        try:
            sent = pipe.post_points(args.repo, points)
        except PandoraError as exc:
            raise SystemExit(f"Failed to post points: {exc}") from exc
    log.info("loaded %d records into repo %s", sent, args.repo)


if __name__ == "__main__":
    main()
