"""
Mirror the JSON-lines lot source into the bundled snapshot.

Use: lotfinder-sync [--source PATH] [--target PATH]
"""
import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import get_config
from .errors import SyncError
from .logging_setup import configure_logging


logger = logging.getLogger(__name__)


def parse_json_lines(contents: str) -> list[Any]:
    """
    Parse one JSON document per non-blank line.

    Only \\n and \\r\\n end a record. Other Unicode line separators may
    appear unescaped inside JSON strings.
    """
    lines = [line.strip() for line in contents.split("\n")]
    items = []
    for index, line in enumerate(lines):
        if not line:
            continue
        try:
            items.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise SyncError(f"Invalid JSON on line {index + 1}: {e.msg}") from e
    return items


def build_snapshot(items: list[Any], source: str) -> dict[str, Any]:
    return {
        "source": source,
        "syncedAt": datetime.now(timezone.utc).isoformat(),
        "count": len(items),
        "items": items,
    }


def sync_snapshot(source_path: Path, target_path: Path) -> Optional[int]:
    """
    Write the snapshot from the source file.

    Returns the number of records written, or None when the source is
    missing and the existing snapshot was kept.
    """
    if not source_path.exists():
        if target_path.exists():
            logger.warning(
                f"Source file not found: {source_path}. Using existing data file: {target_path}"
            )
            return None
        raise SyncError(
            f"Source file not found: {source_path}, and fallback file missing: {target_path}"
        )

    items = parse_json_lines(source_path.read_text(encoding="utf-8"))
    payload = build_snapshot(items, source_path.name)

    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Synced {len(items)} records to {target_path}")
    return len(items)


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = get_config()
    parser = argparse.ArgumentParser(description="Mirror lot details into the catalog snapshot.")
    parser.add_argument("--source", type=Path, default=config.data.source_path)
    parser.add_argument("--target", type=Path, default=config.data.snapshot_path)
    args = parser.parse_args(argv)

    configure_logging(config.log_level)
    try:
        sync_snapshot(args.source, args.target)
    except SyncError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
