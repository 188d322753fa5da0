import logging
import re

from typing import Callable

from models.criterion import (
    Criterion,
    DistinctLDiversity,
    DPresence,
    EntropyLDiversity,
    EqualTCloseness,
    HierarchicalTCloseness,
    Inclusion,
    KAnonymity,
    RecursiveLDiversity,
)

from utils.errors import AmbiguousCriterion, UnparseableCriterion
from utils.escaping import SEPARATOR_KEY_VALUE, SEPARATOR_OPTION, join_escaped, split_escaped, unescape_groups


logger = logging.getLogger(__name__)

INT = r'\s*(\d+)\s*'
FLOAT = r'\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*'


class Grammar(object):
    """ Recognizes the textual form of one criterion type

    Attributes
        name                the criterion type the grammar produces, used in log output
        pattern             case-insensitive pattern the whole token (or its value half) has to match
        build               turns the attribute name and the matched groups into the criterion
        keyed               True if the token has the form attribute=body, the pattern then applies to body only
    """

    def __init__(self, name: str, regex: str, build: Callable[..., Criterion], keyed: bool = False):
        self.name = name
        self.pattern = re.compile(regex, re.IGNORECASE)
        self.build = build
        self.keyed = keyed

    def try_parse(self, token: str) -> Criterion | None:
        attribute = None
        body = token

        if self.keyed:
            parts = split_escaped(token, SEPARATOR_KEY_VALUE)
            if len(parts) != 2 or not parts[0].strip():
                return None

            attribute, body = unescape_groups(parts[0].strip()), parts[1].strip()

        match = self.pattern.fullmatch(body)
        if match is None:
            return None

        if self.keyed:
            return self.build(attribute, *match.groups())

        return self.build(*match.groups())


# Evaluated in this order for every token. The patterns are mutually exclusive, so the order only
# fixes the order of the matches reported for an ambiguous token.
GRAMMARS: list[Grammar] = [
    Grammar("k-anonymity", INT + r'-ANONYMITY',
            lambda k: KAnonymity(int(k))),
    Grammar("d-presence", r'\(' + FLOAT + ',' + FLOAT + r'\)-PRESENCE',
            lambda d_min, d_max: DPresence(float(d_min), float(d_max))),
    Grammar("inclusion", r'INCLUSION',
            lambda: Inclusion()),
    Grammar("distinct-l-diversity", r'DISTINCT-\(' + INT + r'\)-DIVERSITY',
            lambda attribute, l: DistinctLDiversity(attribute, int(l)), keyed=True),
    Grammar("entropy-l-diversity", r'ENTROPY-\(' + FLOAT + r'\)-DIVERSITY',
            lambda attribute, l: EntropyLDiversity(attribute, float(l)), keyed=True),
    Grammar("recursive-c-l-diversity", r'RECURSIVE-\(' + FLOAT + ',' + INT + r'\)-DIVERSITY',
            lambda attribute, c, l: RecursiveLDiversity(attribute, float(c), int(l)), keyed=True),
    Grammar("hierarchical-t-closeness", r'HIERARCHICAL-\(' + FLOAT + r'\)-CLOSENESS',
            lambda attribute, t: HierarchicalTCloseness(attribute, float(t)), keyed=True),
    Grammar("equal-distance-t-closeness", r'EQUALDISTANCE-\(' + FLOAT + r'\)-CLOSENESS',
            lambda attribute, t: EqualTCloseness(attribute, float(t)), keyed=True),
]


def strip_brackets(criteria: str) -> str:
    """ Remove surrounding whitespace and one optional pair of enclosing [ ] """

    criteria = criteria.strip()
    criteria = criteria[1:] if criteria.startswith('[') else criteria
    criteria = criteria[:-1] if criteria.endswith(']') else criteria

    return criteria.strip()


def parse_criterion(token: str, token_index: int = 0, grammars: list[Grammar] = GRAMMARS) -> Criterion:
    token = token.strip()

    matches = []
    for grammar in grammars:
        criterion = grammar.try_parse(token)
        if criterion is not None:
            matches.append(criterion)

    if not matches:
        raise UnparseableCriterion(token_index, token)

    if len(matches) > 1:
        raise AmbiguousCriterion(token_index, token, matches)

    return matches[0]


def parse_criteria(criteria: str | None, separator: str = SEPARATOR_OPTION, grammars: list[Grammar] = GRAMMARS) -> list[Criterion]:
    """ Parse the criteria option into criteria, in the order they were given.

    Every separated token has to be recognized by exactly one grammar. Hierarchies and subsets
    referenced by the criteria are not looked up here.
    """

    if criteria is None:
        return []

    tokens = split_escaped(strip_brackets(criteria), separator, grouped=True)

    parsed = [parse_criterion(token, i, grammars) for i, token in enumerate(tokens)]

    logger.debug("Parsed %d criteria from [%s]: %s", len(parsed), criteria, [str(c) for c in parsed])

    return parsed


def render_criteria(criteria: list[Criterion], separator: str = SEPARATOR_OPTION) -> str:
    """ Inverse of parse_criteria """

    return join_escaped([str(criterion) for criterion in criteria], separator)
