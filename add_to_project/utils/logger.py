import logging
import sys
from add_to_project.config import get_log_settings


class WorkflowCommandFormatter(logging.Formatter):
    """GitHub Actionsのワークフローコマンド形式でログを出力するフォーマッタ

    DEBUG/WARNING/ERRORは`::debug::`等のコマンドとして出力し、
    ランナー側でアノテーションやデバッグログとして扱われる。
    INFOはそのまま出力する。
    """

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def escape_data(value: str) -> str:
    """ワークフローコマンドのメッセージ部分をエスケープ"""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def get_logger(name: str) -> logging.Logger:
    """ロガーインスタンスを取得

    Args:
        name: ロガー名（通常は__name__を渡す）

    Returns:
        logging.Logger: 設定済みロガーインスタンス
    """
    log_settings = get_log_settings()
    logger = logging.getLogger(name)

    # Actions上ではdebugの表示可否をランナーが決める
    if log_settings.GITHUB_ACTIONS or log_settings.RUNNER_DEBUG:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(getattr(logging, log_settings.LOG_LEVEL))

    if not logger.handlers:
        # ワークフローコマンドはstdoutから読まれる
        handler = logging.StreamHandler(sys.stdout)

        if log_settings.GITHUB_ACTIONS:
            formatter = WorkflowCommandFormatter("%(message)s")
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    return logger
