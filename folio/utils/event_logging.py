"""
Site event logging utilities for FOLIO (Tier 2 logging).

Every build and verification run appends one JSON object to site_events.log
(JSON Lines). The detailed per-run log lives in the run's log directory
(Tier 1, see folio.utils.logger); this file is the cross-run history.

Usage:
    from folio.utils.event_logging import log_site_event, get_recent_events

    log_site_event(
        event_type="build_completed",
        source="rendering",
        pages_written=12,
    )

    events = get_recent_events(5, event_type="build_completed")
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from folio.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
SITE_EVENTS_FILE = Path(os.getenv("SITE_EVENTS_FILE", str(LOGS_PATH / "site_events.log")))


def log_site_event(
    event_type: str, source: str, events_file: Optional[Path] = None, **extra_fields
) -> None:
    """
    Append an event to the site event log.

    Args:
        event_type: Type of event (e.g., "build_completed", "verification_failed")
        source: Event source (e.g., "rendering", "verification", "cli")
        events_file: Log file to append to (default: SITE_EVENTS_FILE)
        **extra_fields: Additional event-specific fields (must be JSON serializable)
    """
    events_file = Path(events_file) if events_file else SITE_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    n: int = 10, event_type: Optional[str] = None, events_file: Optional[Path] = None
) -> list[dict]:
    """
    Get the last n events from the site event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        event_type: Filter to only events of this type (optional)
        events_file: Log file to read (default: SITE_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)
    """
    events_file = Path(events_file) if events_file else SITE_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
