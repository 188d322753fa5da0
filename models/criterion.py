from abc import ABC, abstractmethod
from dataclasses import dataclass

from utils.escaping import SEPARATOR_KEY_VALUE, escape, escape_groups


class Criterion(ABC):
    """ Base class of the privacy criteria understood by the criteria option.

    Every criterion is a plain value: two criteria with equal fields are equal, and str() returns
    the canonical text form, which parses back into an equal criterion.
    """

    @abstractmethod
    def __str__(self) -> str:
        pass


class AttributeCriterion(Criterion):
    """ A criterion bound to one sensitive attribute, rendered as attribute=body """

    attribute: str

    @abstractmethod
    def body(self) -> str:
        pass

    def __str__(self) -> str:
        return f"{escape(escape_groups(self.attribute), SEPARATOR_KEY_VALUE)}{SEPARATOR_KEY_VALUE}{self.body()}"


@dataclass(frozen=True)
class KAnonymity(Criterion):
    k: int

    def __str__(self) -> str:
        return f"{self.k}-ANONYMITY"


@dataclass(frozen=True)
class DPresence(Criterion):
    """ d-presence with respect to the research subset. d_min <= d_max is left to the engine to check. """

    d_min: float
    d_max: float

    def __str__(self) -> str:
        return f"({self.d_min!r},{self.d_max!r})-PRESENCE"


@dataclass(frozen=True)
class Inclusion(Criterion):
    def __str__(self) -> str:
        return "INCLUSION"


@dataclass(frozen=True)
class DistinctLDiversity(AttributeCriterion):
    attribute: str
    l: int

    def body(self) -> str:
        return f"DISTINCT-({self.l})-DIVERSITY"


@dataclass(frozen=True)
class EntropyLDiversity(AttributeCriterion):
    attribute: str
    l: float

    def body(self) -> str:
        return f"ENTROPY-({self.l!r})-DIVERSITY"


@dataclass(frozen=True)
class RecursiveLDiversity(AttributeCriterion):
    """ recursive-(c,l)-diversity """

    attribute: str
    c: float
    l: int

    def body(self) -> str:
        return f"RECURSIVE-({self.c!r},{self.l})-DIVERSITY"


@dataclass(frozen=True)
class HierarchicalTCloseness(AttributeCriterion):
    """ t-closeness measured along the generalization hierarchy of the attribute """

    attribute: str
    t: float

    def body(self) -> str:
        return f"HIERARCHICAL-({self.t!r})-CLOSENESS"


@dataclass(frozen=True)
class EqualTCloseness(AttributeCriterion):
    """ t-closeness with the equal ground-distance earth mover's distance """

    attribute: str
    t: float

    def body(self) -> str:
        return f"EQUALDISTANCE-({self.t!r})-CLOSENESS"
