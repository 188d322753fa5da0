from dataclasses import dataclass
from enum import Enum


class SubsetKind(Enum):
    FILE = "FILE"
    QUERY = "QUERY"


@dataclass(frozen=True)
class Subset(object):
    """ The research subset used by d-presence and inclusion

    Attributes
        kind                FILE if the subset is a separate data file, QUERY if it is selected from the input data
        content             path of the subset file or the selection query
    """

    kind: SubsetKind
    content: str

    def __str__(self) -> str:
        return f"{self.kind.value}={self.content}"

    def to_dict(self) -> dict[str, str]:
        key = "path" if self.kind == SubsetKind.FILE else "query"

        return {"kind": self.kind.value, key: self.content}
