import logging

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
from models.gentree import GenTree
from models.subset import Subset

from utils.errors import MissingHierarchy, MissingSubset


logger = logging.getLogger(__name__)


def _require_subset(subset: Subset | None, criterion_name: str) -> Subset:
    if subset is None:
        raise MissingSubset(criterion_name)

    return subset


def _k_anonymity(criterion: KAnonymity, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {"type": "k-anonymity", "k": criterion.k}


def _d_presence(criterion: DPresence, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {
        "type": "d-presence",
        "d_min": criterion.d_min,
        "d_max": criterion.d_max,
        "subset": _require_subset(subset, "d-presence").to_dict(),
    }


def _inclusion(criterion: Inclusion, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {"type": "inclusion", "subset": _require_subset(subset, "inclusion").to_dict()}


def _distinct_l_diversity(criterion: DistinctLDiversity, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {"type": "l-diversity", "variant": "distinct", "attribute": criterion.attribute, "l": criterion.l}


def _entropy_l_diversity(criterion: EntropyLDiversity, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {"type": "l-diversity", "variant": "entropy", "attribute": criterion.attribute, "l": criterion.l}


def _recursive_l_diversity(criterion: RecursiveLDiversity, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {"type": "l-diversity", "variant": "recursive", "attribute": criterion.attribute, "c": criterion.c, "l": criterion.l}


def _hierarchical_t_closeness(criterion: HierarchicalTCloseness, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    hierarchy = hierarchies.get(criterion.attribute)
    if hierarchy is None:
        raise MissingHierarchy(criterion.attribute, "for hierarchical t-closeness a hierarchy has to be defined")

    return {
        "type": "t-closeness",
        "distance": "hierarchical",
        "attribute": criterion.attribute,
        "t": criterion.t,
        "hierarchy": hierarchy.to_table(),
    }


def _equal_t_closeness(criterion: EqualTCloseness, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    return {"type": "t-closeness", "distance": "equal", "attribute": criterion.attribute, "t": criterion.t}


ADAPTERS: dict[type, Callable[[Criterion, dict[str, GenTree], Subset | None], dict]] = {
    KAnonymity: _k_anonymity,
    DPresence: _d_presence,
    Inclusion: _inclusion,
    DistinctLDiversity: _distinct_l_diversity,
    EntropyLDiversity: _entropy_l_diversity,
    RecursiveLDiversity: _recursive_l_diversity,
    HierarchicalTCloseness: _hierarchical_t_closeness,
    EqualTCloseness: _equal_t_closeness,
}


def adapt_criterion(criterion: Criterion, hierarchies: dict[str, GenTree], subset: Subset | None) -> dict:
    adapter = ADAPTERS.get(type(criterion))
    if adapter is None:
        raise TypeError(f"No engine representation for criterion {criterion!r}")

    return adapter(criterion, hierarchies, subset)


def adapt_criteria(criteria: list[Criterion], hierarchies: dict[str, GenTree], subset: Subset | None) -> list[dict]:
    """ Bind the criteria to the hierarchies and the research subset and translate them for the engine.

    Raises MissingHierarchy for hierarchical t-closeness on an attribute without hierarchy and
    MissingSubset for d-presence or inclusion without a research subset.
    """

    adapted = [adapt_criterion(criterion, hierarchies, subset) for criterion in criteria]

    logger.debug("Adapted criteria %s", [str(criterion) for criterion in criteria])

    return adapted
