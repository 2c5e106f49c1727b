from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Union


class FieldDataType(str, Enum):
    """Projectフィールドのデータ型"""

    SINGLE_SELECT = "SINGLE_SELECT"
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    UNSUPPORTED = "UNSUPPORTED"

    @classmethod
    def classify(cls, raw: Optional[str]) -> "FieldDataType":
        """APIが返すdataTypeを分類（未対応の型はUNSUPPORTED）"""
        if raw in (cls.SINGLE_SELECT.value, cls.TEXT.value, cls.NUMBER.value):
            return cls(raw)
        return cls.UNSUPPORTED


class OptionSpec(BaseModel):
    """単一選択フィールドの選択肢"""

    id: str
    name: str


class FieldSpec(BaseModel):
    """GitHub Projectのフィールド"""

    id: str
    name: str
    dataType: Optional[str] = None  # APIが返した生の値
    options: Optional[List[OptionSpec]] = None

    @property
    def kind(self) -> FieldDataType:
        return FieldDataType.classify(self.dataType)


class SingleSelectValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    singleSelectOptionId: str


class TextValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    textValueName: str


class NumberValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    numberValue: str


ValuePayload = Union[SingleSelectValue, TextValue, NumberValue]


class FieldUpdate(BaseModel):
    """フィールド更新1件分（updateProjectV2ItemFieldValueの1呼び出しに対応）"""

    model_config = ConfigDict(frozen=True)

    fieldId: str
    value: ValuePayload

    def to_graphql_value(self) -> dict:
        """ProjectV2FieldValue入力の形に変換

        Raises:
            ValueError: numberValueが数値として解釈できない場合
        """
        if isinstance(self.value, SingleSelectValue):
            return {"singleSelectOptionId": self.value.singleSelectOptionId}
        if isinstance(self.value, TextValue):
            return {"text": self.value.textValueName}
        return {"number": float(self.value.numberValue)}


class Label(BaseModel):
    """Issue/PRのラベル"""

    name: str


class EventContent(BaseModel):
    """イベントの対象となるIssueまたはPull Request"""

    node_id: str
    number: Optional[int] = None
    html_url: str
    labels: List[Label] = []


class EventContext(BaseModel):
    """ワークフローイベントから取り出した情報"""

    content: EventContent
    owner_login: Optional[str] = None

    @property
    def label_names(self) -> List[str]:
        return [label.name.lower() for label in self.content.labels]


class ProjectLocation(BaseModel):
    """Project URLから取り出した所有者と番号"""

    model_config = ConfigDict(frozen=True)

    owner_type: str  # "orgs" or "users"
    owner_name: str
    number: int
