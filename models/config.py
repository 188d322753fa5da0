from dataclasses import dataclass, field

from models.criterion import Criterion
from models.data_type import DataType
from models.gentree import GenTree
from models.metric import Metric
from models.subset import Subset


@dataclass(frozen=True)
class Config(object):
    """ Everything the anonymization engine needs besides the data, built once per run from the options

    Attributes
        qid_names                           names of the attributes that are indirect or quasi-identifers
        sensitive_attr_names                names of the sensitive attributes
        insensitive_attr_names              names of the attributes released unchanged
        identifying_attr_names              names of the directly identifying attributes, removed from the output
        gen_hiers                           parsed generalization hierarchies, per attribute
        data_types                          declared data types, per attribute
        criteria                            the privacy criteria, in the order they were given
        subset                              the research subset, if one was given
        metric                              information loss metric to optimize
        suppression                         share of records that may be suppressed as outliers, 0 to 1
        practical_monotonicity              whether the engine may assume practical monotonicity
        separator                           separator of the data and hierarchy files
    """

    qid_names: list[str] = field(default_factory=list)
    sensitive_attr_names: list[str] = field(default_factory=list)
    insensitive_attr_names: list[str] = field(default_factory=list)
    identifying_attr_names: list[str] = field(default_factory=list)

    gen_hiers: dict[str, GenTree] = field(default_factory=dict)
    data_types: dict[str, DataType] = field(default_factory=dict)

    criteria: list[Criterion] = field(default_factory=list)
    subset: Subset | None = None

    metric: Metric = Metric.ENTROPY
    suppression: float = 0.0
    practical_monotonicity: bool = False

    separator: str = ';'

    def attribute_roles(self) -> dict[str, str]:
        roles = {}

        for attr_name in self.identifying_attr_names:
            roles[attr_name] = "IDENTIFYING"
        for attr_name in self.insensitive_attr_names:
            roles[attr_name] = "INSENSITIVE"
        for attr_name in self.sensitive_attr_names:
            roles[attr_name] = "SENSITIVE"
        for attr_name in self.qid_names:
            roles[attr_name] = "QUASI_IDENTIFYING"

        return roles
