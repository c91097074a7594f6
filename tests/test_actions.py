"""Tests for action parsing."""

import json

import pytest

from ntfy_client.errors import ParseError
from ntfy_client.schemas.action import ActionKind, HttpAction, ViewAction, find_action, parse_actions


class TestActionKind:
    """Tests for ActionKind enum."""

    def test_kinds(self):
        """Verify the supported action kinds."""
        assert ActionKind.VIEW == "view"
        assert ActionKind.HTTP == "http"
        assert len(ActionKind) == 2


class TestParseActions:
    """Tests for parse_actions."""

    def test_parses_view_and_http(self):
        """Test parsing both supported kinds."""
        raw = json.dumps(
            [
                {"id": "a1", "action": "view", "label": "Open", "url": "https://x/y", "clear": True},
                {
                    "id": "a2",
                    "action": "http",
                    "label": "Close door",
                    "url": "https://x/z",
                    "method": "PUT",
                    "headers": {"Authorization": "Bearer abc"},
                    "body": '{"open": false}',
                },
            ]
        )

        actions = parse_actions(raw)

        assert actions == [
            ViewAction(id="a1", label="Open", url="https://x/y", clear=True),
            HttpAction(
                id="a2",
                label="Close door",
                url="https://x/z",
                method="PUT",
                headers={"Authorization": "Bearer abc"},
                body='{"open": false}',
            ),
        ]

    def test_http_defaults(self):
        """Test that missing http fields fall back to defaults."""
        actions = parse_actions('[{"id": "a1", "action": "http", "url": "https://x/z"}]')

        assert len(actions) == 1
        action = actions[0]
        assert isinstance(action, HttpAction)
        assert action.method == "GET"
        assert action.headers == {}
        assert action.body is None
        assert action.label == ""

    def test_numeric_header_values_become_strings(self):
        """Test that a number in the headers object does not drop the action."""
        actions = parse_actions(
            '[{"id": "a1", "action": "http", "url": "https://x", "headers": {"X-Priority": 5}}]'
        )

        assert len(actions) == 1
        assert actions[0].headers == {"X-Priority": "5"}

    def test_view_defaults(self):
        """Test that clear defaults to False."""
        (action,) = parse_actions('[{"id": "a1", "action": "view", "url": "/x"}]')
        assert action.clear is False

    def test_unknown_kinds_are_dropped(self):
        """Test that unsupported kinds are skipped and the rest is kept."""
        raw = json.dumps(
            [
                {"id": "a1", "action": "broadcast", "extras": {"cmd": "pic"}},
                {"id": "a2", "action": "view", "url": "https://x/y"},
                {"id": "a3", "action": "launch-rocket", "url": "https://x/z"},
                {"id": "a4"},
            ]
        )

        actions = parse_actions(raw)

        assert [a.id for a in actions] == ["a2"]

    def test_invalid_entries_are_dropped(self):
        """Test that entries failing validation are skipped."""
        raw = json.dumps(
            [
                "not an object",
                {"action": "view", "url": "https://x/no-id"},
                {"id": "a2", "action": "http"},
                {"id": "a3", "action": "http", "url": "https://x", "headers": "nope"},
                {"id": "a4", "action": "http", "url": "https://x"},
            ]
        )

        actions = parse_actions(raw)

        assert [a.id for a in actions] == ["a4"]

    def test_all_unknown_yields_empty_list(self):
        """Test a batch with only unknown kinds."""
        assert parse_actions('[{"id": "a1", "action": "broadcast"}]') == []

    def test_empty_array(self):
        assert parse_actions("[]") == []

    @pytest.mark.parametrize("raw", ["not json", '{"id": "a1"}', "42", ""])
    def test_non_array_raises(self, raw):
        """Test that anything but a JSON array is a parse error."""
        with pytest.raises(ParseError):
            parse_actions(raw)

    def test_actions_are_immutable(self):
        """Test that parsed actions cannot be modified."""
        (action,) = parse_actions('[{"id": "a1", "action": "view", "url": "/x"}]')
        with pytest.raises(Exception):
            action.url = "/y"


class TestFindAction:
    """Tests for find_action."""

    def test_finds_by_id(self):
        actions = parse_actions(
            '[{"id": "a1", "action": "view", "url": "/1"}, {"id": "a2", "action": "view", "url": "/2"}]'
        )
        assert find_action(actions, "a2").url == "/2"

    def test_missing_id(self):
        actions = parse_actions('[{"id": "a1", "action": "view", "url": "/1"}]')
        assert find_action(actions, "a9") is None
        assert find_action(actions, None) is None
        assert find_action([], "a1") is None
