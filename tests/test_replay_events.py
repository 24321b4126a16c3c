"""
Replay script tests.
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from replay_events import load_events, main


class TestReplayEvents:
    """Test the event replay script."""

    def test_json_lines(self, tmp_path, capsys):
        """Test replaying a JSON lines file."""
        events_file = tmp_path / "events.jsonl"
        events_file.write_text("\n".join([
            json.dumps({"toolName": "update_findings", "params": {"findings": [{"id": "f1", "title": "Gap"}]}}),
            json.dumps({"toolName": "mystery_tool", "params": {}}),
            "",
            json.dumps({"toolName": "update_findings", "params": {"findings": [{"id": "f2"}]}}),
        ]))

        assert main([str(events_file)]) == 0

        snapshot = json.loads(capsys.readouterr().out)
        assert [f["id"] for f in snapshot["findings"]] == ["f1", "f2"]

    def test_json_array(self, tmp_path):
        """Test replaying a JSON array file."""
        events_file = tmp_path / "events.json"
        events_file.write_text(json.dumps([{"toolName": "reset", "params": {}}]))
        assert load_events(events_file) == [{"toolName": "reset", "params": {}}]

    def test_invalid_file(self, tmp_path):
        """Test an invalid events file."""
        events_file = tmp_path / "broken.json"
        events_file.write_text("[not json")
        assert main([str(events_file)]) == 1

    def test_missing_file(self, tmp_path):
        """Test a missing events file."""
        assert main([str(tmp_path / "absent.json")]) == 1
