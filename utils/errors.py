class CliError(Exception):
    """ Base class of every error the command-line front end reports to the user """


class CriteriaParseError(CliError, ValueError):
    """ Raised when a raw option string cannot be turned into a domain object """


class UnparseableCriterion(CriteriaParseError):
    def __init__(self, token_index: int, token: str):
        self.token_index = token_index
        self.token = token

        super().__init__(f"Criterion number {token_index + 1} could not be parsed: [{token}]")


class AmbiguousCriterion(CriteriaParseError):
    def __init__(self, token_index: int, token: str, matches: list):
        self.token_index = token_index
        self.token = token
        self.matches = matches

        super().__init__(f"Criterion number {token_index + 1} matched more than one grammar: [{token}] -> {matches}")


class MalformedHierarchySpec(CriteriaParseError):
    def __init__(self, token: str):
        self.token = token

        super().__init__(f"Hierarchy specification is malformed, expected attribute=filename: [{token}]")


class MalformedHierarchyFile(CriteriaParseError):
    def __init__(self, path: str, reason: str):
        self.path = path

        super().__init__(f"Hierarchy file {path} is malformed: {reason}")


class MalformedDataTypeSpec(CriteriaParseError):
    def __init__(self, token: str):
        self.token = token

        super().__init__(f"Datatype specification is malformed, expected attribute=TYPE[(format)]: [{token}]")


class UnknownDataType(CriteriaParseError):
    def __init__(self, name: str):
        self.name = name

        super().__init__(f"Datatype not recognized: {name}")


class MalformedSubsetSpec(CriteriaParseError):
    def __init__(self, spec: str):
        self.spec = spec

        super().__init__(f"Subset specification is malformed, expected FILE=filename or QUERY=query: [{spec}]")


class UnknownSubsetKind(CriteriaParseError):
    def __init__(self, tag: str):
        self.tag = tag

        super().__init__(f"Subset specification not recognized: {tag}")


class MalformedDatabaseSpec(CriteriaParseError):
    def __init__(self, token: str, reason: str):
        self.token = token

        super().__init__(f"Database specification is malformed ({reason}): [{token}]")


class UnknownMetric(CriteriaParseError):
    def __init__(self, name: str):
        self.name = name

        super().__init__(f"Metric unknown: {name}")


class InvalidSuppression(CriteriaParseError):
    def __init__(self, value: float):
        self.value = value

        super().__init__(f"Suppression limit must be between 0 and 1, got {value}")


class InvalidSeparator(CriteriaParseError):
    def __init__(self, option: str, reason: str = "only a single character or the keyword 'DETECT' is allowed"):
        self.option = option

        super().__init__(f"Invalid separator [{option}]: {reason}")


class MissingHierarchy(CliError):
    def __init__(self, attribute: str, context: str = "a hierarchy has to be defined"):
        self.attribute = attribute

        super().__init__(f"{context}: {attribute}")


class MissingSubset(CliError):
    def __init__(self, criterion: str):
        self.criterion = criterion

        super().__init__(f"For {criterion} a research subset has to be defined")


class UnsupportedDatabase(CliError):
    def __init__(self, db_type: str):
        self.db_type = db_type

        super().__init__(f"Import from database type {db_type} is currently not supported")


class EngineError(CliError):
    """ Raised when the external anonymization engine could not be run or reported a failure """


class DatabaseError(CliError):
    """ Raised when the input table could not be read from the database """
