import uuid
from pathlib import Path
from add_to_project.utils.logger import get_logger

logger = get_logger(__name__)


def set_output(name: str, value: str, output_path: str = "") -> None:
    """ステップの出力を設定

    GITHUB_OUTPUTファイルに`name=value`を追記する。
    複数行の値はデリミタ付きの形式で書き込む。

    Args:
        name: 出力名
        value: 出力値
        output_path: GITHUB_OUTPUTのパス（空ならログ出力のみ）
    """
    if not output_path:
        logger.info(f"Output {name}={value} (GITHUB_OUTPUT is not set)")
        return

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"

    with open(Path(output_path), "a", encoding="utf-8") as f:
        f.write(entry)
    logger.debug(f"Set output {name}")
