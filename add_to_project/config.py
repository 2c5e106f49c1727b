from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Dict, List


class ConfigError(ValueError):
    """アクション入力の設定エラー"""

    pass


class LogSettings(BaseSettings):
    """ログ出力の設定（必須入力なしで読み込める）"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    LOG_LEVEL: str = "INFO"
    GITHUB_ACTIONS: bool = False
    RUNNER_DEBUG: bool = False

    @field_validator("GITHUB_ACTIONS", "RUNNER_DEBUG", mode="before")
    @classmethod
    def empty_as_false(cls, v):
        """ランナーが空文字を渡した場合はFalse扱い"""
        if isinstance(v, str) and not v.strip():
            return False
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return level


class Settings(LogSettings):
    """アクション設定

    GitHub Actionsのランナーは`with:`の入力を`INPUT_<NAME>`環境変数として渡す
    （名前は大文字化され、ハイフンはそのまま残る）。
    """

    # Action inputs
    PROJECT_URL: str = Field(validation_alias="INPUT_PROJECT-URL")
    GITHUB_TOKEN: str = Field(validation_alias="INPUT_GITHUB-TOKEN")
    FIELDS: str = Field("", validation_alias="INPUT_FIELDS")
    LABELED: str = Field("", validation_alias="INPUT_LABELED")
    LABEL_OPERATOR: str = Field("or", validation_alias="INPUT_LABEL-OPERATOR")

    # Runner environment
    GITHUB_EVENT_PATH: str = ""
    GITHUB_OUTPUT: str = ""
    GITHUB_API_URL: str = "https://api.github.com"

    @field_validator("PROJECT_URL", "FIELDS", "LABELED")
    @classmethod
    def strip_input(cls, v: str) -> str:
        return v.strip()

    @field_validator("PROJECT_URL")
    @classmethod
    def validate_project_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Input required and not supplied: project-url")
        return v

    @field_validator("GITHUB_TOKEN")
    @classmethod
    def validate_github_token(cls, v: str) -> str:
        """GitHub tokenの存在確認（形式はGHESやレガシーPATがあるため問わない）"""
        v = v.strip()
        if not v:
            raise ValueError("Input required and not supplied: github-token")
        return v

    @field_validator("LABEL_OPERATOR")
    @classmethod
    def normalize_label_operator(cls, v: str) -> str:
        """ラベル演算子を正規化（未指定は`or`）"""
        return v.strip().lower() or "or"

    @property
    def desired_fields(self) -> Dict[str, str]:
        return parse_fields(self.FIELDS)

    @property
    def labels(self) -> List[str]:
        return parse_labels(self.LABELED)


def parse_fields(raw: str) -> Dict[str, str]:
    """`fields`入力を「フィールド名 -> 値」の順序付き辞書に変換

    1行に1つ`key=value`を書く。最初の`=`で分割し、前後の空白は除去する。
    空行は無視する。大文字小文字だけが異なるキーは同じフィールドとして扱う。

    Args:
        raw: `fields`入力の文字列

    Returns:
        Dict[str, str]: 入力順を保持したフィールド名と値の辞書

    Raises:
        ConfigError: `=`がない、キーまたは値が空の行がある場合
    """
    fields: Dict[str, str] = {}
    seen: Dict[str, str] = {}  # 小文字化したキー -> 最初に現れた表記
    for line_no, line in enumerate(raw.splitlines(), start=1):
        if not line.strip():
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        if not sep:
            raise ConfigError(
                f"Invalid fields entry on line {line_no}: {line!r}. Expected the format <field name>=<value>"
            )
        if not key:
            raise ConfigError(f"Invalid fields entry on line {line_no}: field name is empty")
        if not value:
            raise ConfigError(
                f"Invalid fields entry on line {line_no}: value for field {key!r} is empty"
            )

        # 位置は最初の表記、値は最後のもの
        key = seen.setdefault(key.lower(), key)
        fields[key] = value
    return fields


def parse_labels(raw: str) -> List[str]:
    """`labeled`入力をカンマで分割し、小文字化したラベル名のリストにする"""
    labels = [label.strip().lower() for label in raw.split(",")]
    return [label for label in labels if label]


@lru_cache()
def get_log_settings() -> LogSettings:
    """ログ設定のシングルトンインスタンスを取得"""
    return LogSettings()


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
