"""User action schemas attached to messages.

Actions travel as a JSON-encoded array under the message's ``actions`` key.
Each entry carries an ``id`` and an ``action`` discriminator; only the kinds
in :class:`ActionKind` are supported, everything else is dropped at parse
time so the executor never sees an unknown kind.
"""

import json
import logging
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ntfy_client.errors import ParseError

logger = logging.getLogger(__name__)


class ActionKind(StrEnum):
    """Supported action kinds."""

    VIEW = "view"
    HTTP = "http"


class ViewAction(BaseModel):
    """Open a URL in the browser or app."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    action: Literal["view"] = "view"
    id: str = Field(min_length=1)
    label: str = ""
    url: str
    clear: bool = False


class HttpAction(BaseModel):
    """Send an HTTP request in the background."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    action: Literal["http"] = "http"
    id: str = Field(min_length=1)
    label: str = ""
    url: str
    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None


Action = Annotated[ViewAction | HttpAction, Field(discriminator="action")]

_action_adapter: TypeAdapter[ViewAction | HttpAction] = TypeAdapter(Action)


def parse_actions(raw: str) -> list[ViewAction | HttpAction]:
    """Parse a JSON-encoded action array.

    Raises ParseError only if ``raw`` is not a JSON array. Individual entries
    that are malformed or of an unsupported kind are skipped with a warning.
    """
    try:
        entries = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise ParseError(f"Actions are not valid JSON: {e}") from e

    if not isinstance(entries, list):
        raise ParseError(f"Actions must be a JSON array, got {type(entries).__name__}")

    actions: list[ViewAction | HttpAction] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping action #{index}: not an object")
            continue

        kind = entry.get("action")
        if kind not in list(ActionKind):
            logger.warning(f"Action {kind!r} not supported, skipping action #{index}")
            continue

        try:
            actions.append(_action_adapter.validate_python(entry))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {kind} action #{index}: {e.error_count()} errors")

    return actions


def find_action(
    actions: list[ViewAction | HttpAction], action_id: str | None
) -> ViewAction | HttpAction | None:
    """Find an action by id."""
    if not action_id:
        return None
    return next((action for action in actions if action.id == action_id), None)
