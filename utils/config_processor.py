import logging
import re

from models.config import Config
from models.data_type import DataType, DataTypeName
from models.database_spec import DatabaseSpec, DatabaseType
from models.metric import Metric
from models.subset import Subset, SubsetKind

from utils.criteria_parser import parse_criteria
from utils.errors import (
    CliError,
    InvalidSeparator,
    InvalidSuppression,
    MalformedDatabaseSpec,
    MalformedDataTypeSpec,
    MalformedHierarchySpec,
    MalformedSubsetSpec,
    MissingHierarchy,
    UnknownDataType,
    UnknownMetric,
    UnknownSubsetKind,
)
from utils.escaping import SEPARATOR_KEY_VALUE, SEPARATOR_OPTION, split_escaped, unescape_groups
from utils.read_gen_hierarchies import read_gen_hierarchies
from utils.separator_detector import detect_separator


logger = logging.getLogger(__name__)

DETECT = "DETECT"

DATA_TYPE_PATTERN = re.compile(r'\s*(\w+)\s*(?:\((.*)\))?\s*', re.DOTALL)
SUBSET_PATTERN = re.compile(r'\s*(\w+)\s*=(.*)', re.DOTALL)

DATABASE_KEYS = {"TYPE", "URL", "PORT", "USER", "PASSWORD", "DATABASE", "TABLE"}


def _split_key_value(token: str) -> list[str]:
    return split_escaped(token, SEPARATOR_KEY_VALUE)


def parse_attributes(option: str | None, separator: str = SEPARATOR_OPTION) -> list[str]:
    return [attr_name.strip() for attr_name in split_escaped(option, separator)]


def parse_hierarchies(option: str | None, separator: str = SEPARATOR_OPTION) -> dict[str, str]:
    """ Map every attribute of the hierarchy option (attr1=file1,attr2=file2) to its hierarchy file """

    hierarchy_files: dict[str, str] = {}

    for token in split_escaped(option, separator):
        split = _split_key_value(token)
        if len(split) != 2 or not split[0].strip():
            raise MalformedHierarchySpec(token)

        hierarchy_files[split[0].strip()] = split[1].strip()

    return hierarchy_files


def parse_data_type(value: str) -> DataType:
    """ Parse TYPENAME or TYPENAME(format), the type name being case-insensitive """

    match = DATA_TYPE_PATTERN.fullmatch(value)
    if match is None:
        raise MalformedDataTypeSpec(value)

    type_name, data_format = match.group(1).upper(), match.group(2)

    try:
        name = DataTypeName(type_name)
    except ValueError:
        raise UnknownDataType(match.group(1)) from None

    if data_format is not None and name in (DataTypeName.STRING, DataTypeName.INTEGER):
        logger.warning("Ignoring format (%s) given for datatype %s", data_format, name.value)
        data_format = None

    return DataType(name, data_format or None)


def parse_data_types(option: str | None, separator: str = SEPARATOR_OPTION) -> dict[str, DataType]:
    """ Map every attribute of the datatype option (attr1=STRING,attr2=DATE(dd.MM.yyyy)) to its data type """

    data_types: dict[str, DataType] = {}

    for token in split_escaped(option, separator, grouped=True):
        split = _split_key_value(token)
        if len(split) != 2 or not split[0].strip():
            raise MalformedDataTypeSpec(token)

        data_types[unescape_groups(split[0].strip())] = parse_data_type(split[1])

    return data_types


def parse_subset(option: str | None) -> Subset | None:
    """ Parse FILE=<path> or QUERY=<expression>, None if no subset was given """

    if option is None or not option.strip():
        return None

    match = SUBSET_PATTERN.fullmatch(option)
    if match is None or not match.group(2).strip():
        raise MalformedSubsetSpec(option)

    try:
        kind = SubsetKind(match.group(1).upper())
    except ValueError:
        raise UnknownSubsetKind(match.group(1)) from None

    return Subset(kind, match.group(2).strip())


def parse_database(option: str | None, separator: str = SEPARATOR_OPTION) -> DatabaseSpec | None:
    """ Parse TYPE=MYSQL,URL=host,PORT=3306,USER=name,PASSWORD=secret,DATABASE=db,TABLE=table """

    if option is None or not option.strip():
        return None

    values: dict[str, str] = {}

    for token in split_escaped(option.strip().removeprefix('[').removesuffix(']'), separator):
        split = _split_key_value(token)
        if len(split) != 2:
            raise MalformedDatabaseSpec(token, "expected KEY=value")

        key = split[0].strip().upper()
        if key not in DATABASE_KEYS:
            raise MalformedDatabaseSpec(token, f"unknown key {split[0].strip()}")

        values[key] = split[1].strip()

    for required in ("TYPE", "DATABASE", "TABLE"):
        if required not in values:
            raise MalformedDatabaseSpec(option, f"{required} is missing")

    try:
        db_type = DatabaseType(values["TYPE"].upper())
    except ValueError:
        raise MalformedDatabaseSpec(option, f"unknown database type {values['TYPE']}") from None

    port = None
    if "PORT" in values:
        if not values["PORT"].isdigit():
            raise MalformedDatabaseSpec(option, f"port {values['PORT']} is not a number")
        port = int(values["PORT"])

    return DatabaseSpec(
        type=db_type,
        database=values["DATABASE"],
        table=values["TABLE"],
        host=values.get("URL", "localhost"),
        port=port,
        user=values.get("USER"),
        password=values.get("PASSWORD"),
    )


def parse_metric(option: str | None) -> Metric:
    if option is None:
        return Metric.ENTROPY

    try:
        return Metric(option.strip().upper())
    except ValueError:
        raise UnknownMetric(option) from None


def parse_suppression(value: float | str | None) -> float:
    if value is None:
        return 0.0

    try:
        suppression = float(value)
    except ValueError:
        raise InvalidSuppression(value) from None

    if not 0.0 <= suppression <= 1.0:
        raise InvalidSuppression(suppression)

    return suppression


def parse_separator(option: str | None, input_file: str | None = None) -> str:
    """ Return the separator character, detecting it from the input file for the keyword DETECT """

    if option is None:
        return ';'

    if len(option) == 1:
        return option

    if option.upper() == DETECT:
        if input_file is None:
            raise InvalidSeparator(option, "separator detection requires an input file")

        return detect_separator(input_file)

    raise InvalidSeparator(option)


def parse_flag(value: bool | str | None) -> bool:
    if isinstance(value, str):
        return value.strip().upper() in ("TRUE", "YES", "1")

    return bool(value)


def parse_config(options: dict, separator: str) -> Config:
    """ Turn the raw option values into the configuration of one anonymization run.

    All option strings are parsed before the first hierarchy file is read, so a typo fails fast.
    """

    qid_names = parse_attributes(options.get("quasiidentifying"))

    criteria = parse_criteria(options.get("criteria"))
    if not criteria:
        raise CliError("At least one privacy criterion has to be specified")

    data_types = parse_data_types(options.get("datatype"))
    subset = parse_subset(options.get("researchsubset"))
    metric = parse_metric(options.get("metric"))
    suppression = parse_suppression(options.get("suppression"))

    hierarchy_files = parse_hierarchies(options.get("hierarchies"))
    for attr_name in qid_names:
        if attr_name not in hierarchy_files:
            raise MissingHierarchy(attr_name, "quasi identifiers must have a hierarchy specified")

    config = Config(
        qid_names=qid_names,
        sensitive_attr_names=parse_attributes(options.get("sensitive")),
        insensitive_attr_names=parse_attributes(options.get("insensitive")),
        identifying_attr_names=parse_attributes(options.get("identifying")),
        gen_hiers=read_gen_hierarchies(hierarchy_files, separator),
        data_types=data_types,
        criteria=criteria,
        subset=subset,
        metric=metric,
        suppression=suppression,
        practical_monotonicity=parse_flag(options.get("practicalmonotonicity")),
        separator=separator,
    )

    logger.debug("Parsed configuration: %d criteria, %d hierarchies, subset %s",
                 len(config.criteria), len(config.gen_hiers), config.subset)

    return config
