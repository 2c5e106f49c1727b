import json
from pathlib import Path
from pydantic import ValidationError
from add_to_project.config import ConfigError
from add_to_project.github.models import EventContent, EventContext
from add_to_project.utils.logger import get_logger

logger = get_logger(__name__)


def load_event(event_path: str) -> EventContext:
    """ワークフローイベントのペイロードを読み込む

    Args:
        event_path: GITHUB_EVENT_PATHが指すJSONファイル

    Returns:
        EventContext: 対象Issue/PRとリポジトリ所有者

    Raises:
        ConfigError: ファイルが読めない、またはIssue/PRイベントでない場合
    """
    if not event_path:
        raise ConfigError("GITHUB_EVENT_PATH is not set; this action must run inside a workflow")

    path = Path(event_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read event payload {path}: {e}") from e

    return parse_event(payload)


def parse_event(payload: dict) -> EventContext:
    """イベントペイロードからIssue（なければPull Request）を取り出す"""
    content = payload.get("issue") or payload.get("pull_request")
    if not content:
        raise ConfigError("Event payload contains neither an issue nor a pull_request")

    owner_login = ((payload.get("repository") or {}).get("owner") or {}).get("login")

    try:
        event = EventContext(
            content=EventContent.model_validate(content), owner_login=owner_login
        )
    except ValidationError as e:
        raise ConfigError(f"Unexpected issue/pull_request payload: {e}") from e

    logger.debug(f"Issue/PR owner: {owner_login}")
    return event
