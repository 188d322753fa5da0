from dataclasses import dataclass
from enum import Enum


class DataTypeName(Enum):
    STRING = "STRING"
    INTEGER = "INTEGER"
    DECIMAL = "DECIMAL"
    DATE = "DATE"


@dataclass(frozen=True)
class DataType(object):
    """ Data type of one attribute, as given in the datatype option

    Attributes
        name                one of STRING, INTEGER, DECIMAL, DATE
        format              number format for DECIMAL or date pattern for DATE, None means the engine default
    """

    name: DataTypeName
    format: str | None = None

    def __str__(self) -> str:
        if self.format is None:
            return self.name.value

        return f"{self.name.value}({self.format})"

    def to_dict(self) -> dict[str, str]:
        if self.format is None:
            return {"type": self.name.value}

        return {"type": self.name.value, "format": self.format}
