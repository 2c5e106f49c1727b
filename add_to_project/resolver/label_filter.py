from typing import Iterable
from add_to_project.utils.logger import get_logger

logger = get_logger(__name__)

LABEL_OPERATORS = ("and", "or", "not")


def should_process(labeled: Iterable[str], operator: str, issue_labels: Iterable[str]) -> bool:
    """Issue/PRのラベルが`labeled`フィルタを満たすか判定

    Args:
        labeled: 指定されたラベル（小文字化済み）
        operator: "and" / "or" / "not"（それ以外は"or"として扱う）
        issue_labels: Issue/PRに付いているラベル（小文字化済み）

    Returns:
        bool: 処理を続行するならTrue
    """
    requested = list(labeled)
    actual = set(issue_labels)
    operator = (operator or "").strip().lower()

    if operator == "and":
        return all(label in actual for label in requested)
    if operator == "not":
        return not any(label in actual for label in requested)

    if operator not in LABEL_OPERATORS:
        logger.debug(f"Unknown label operator {operator!r}, falling back to 'or'")
    return not requested or any(label in actual for label in requested)
