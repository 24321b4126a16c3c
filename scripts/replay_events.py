#!/usr/bin/env python3
"""
Replay a recorded stream of agent tool-call events and print the resulting dashboard.
Accepts a JSON array or JSON-lines file of {"toolName": ..., "params": ...} objects.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from leakage_dashboard.agents.router import DashboardEventRouter


def load_events(path: Path):
    """Load events from a JSON array or a JSON-lines file."""
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return []
    if text.startswith("["):
        return json.loads(text)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Replay agent tool-call events into a fresh dashboard")
    parser.add_argument("events_file", type=Path, help="JSON array or JSON-lines file of events")
    parser.add_argument("--pretty", action="store_true", help="Indent the printed snapshot")
    args = parser.parse_args(argv)

    try:
        events = load_events(args.events_file)
    except (OSError, ValueError) as e:
        print(f"❌ Could not read events from {args.events_file}: {e}", file=sys.stderr)
        return 1

    router = DashboardEventRouter()
    for event in events:
        router.dispatch(event)

    print(json.dumps(router.state.snapshot(), indent=2 if args.pretty else None, ensure_ascii=False))
    print(f"ℹ️  Replayed {len(events)} events: {router.get_stats()}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
