"""
Build event logging utilities (Tier 2 logging).

Appends one JSON object per line to packaging_events.log so that release
tooling (conversion, packaging, publishing) leaves a single audit trail.

For detailed within-context logging (Tier 1), use rhs_packaging.utils.logger instead.

Usage:
    from rhs_packaging.utils.event_logging import log_packaging_event

    log_packaging_event(
        event_type="build_completed",
        package="rhs-hadoop-install-2_0",
        source="tarball",
        tarball="/srv/release/rhs-hadoop-install-2_0.tar.gz",
    )
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from rhs_packaging.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PACKAGING_EVENTS_FILE = Path(
    os.getenv("PACKAGING_EVENTS_FILE", str(LOGS_PATH / "packaging_events.log"))
)


def log_packaging_event(event_type: str, package: str, source: str, **extra_fields) -> None:
    """
    Log an event to the packaging event log.

    Args:
        event_type: Type of event (e.g., "build_started", "build_failed", "publish_completed")
        package: Package identifier, usually "<package-name>-<version>"
        source: Event source (e.g., "tarball", "delivery", "cli")
        **extra_fields: Additional event-specific fields (non-JSON values are stringified)
    """
    PACKAGING_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "package": package,
        "source": source,
        **extra_fields,
    }

    with open(PACKAGING_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")


def get_recent_events(
    n: int = 10, package: Optional[str] = None, event_type: Optional[str] = None
) -> List[Dict]:
    """
    Get the last n events from the packaging log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        package: Filter to only events for this package (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    if not PACKAGING_EVENTS_FILE.exists():
        return []

    events = []
    with open(PACKAGING_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if package:
        events = [e for e in events if e.get("package") == package]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
