"""Tests for the resolvers turning option strings into configuration objects."""

import pytest

from models.criterion import DPresence, HierarchicalTCloseness, KAnonymity
from models.data_type import DataType, DataTypeName
from models.database_spec import DatabaseSpec, DatabaseType
from models.metric import Metric
from models.subset import Subset, SubsetKind
from utils.config_processor import (
    parse_attributes,
    parse_config,
    parse_data_type,
    parse_data_types,
    parse_database,
    parse_flag,
    parse_hierarchies,
    parse_metric,
    parse_separator,
    parse_subset,
    parse_suppression,
)
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


class TestParseHierarchies:

    def test_maps_attributes_to_files(self):
        assert parse_hierarchies("age=age.csv,zipcode=hier/zip.csv") == {"age": "age.csv", "zipcode": "hier/zip.csv"}

    def test_last_duplicate_wins(self):
        assert parse_hierarchies("age=a.csv,age=b.csv") == {"age": "b.csv"}

    def test_escaped_separators(self):
        assert parse_hierarchies(r"age=my\,file.csv,b\=c=x.csv") == {"age": "my,file.csv", "b=c": "x.csv"}

    @pytest.mark.parametrize("option", [None, ""])
    def test_no_hierarchies(self, option):
        assert parse_hierarchies(option) == {}

    @pytest.mark.parametrize("option", ["age", "age=a.csv=b", "=a.csv"])
    def test_malformed(self, option):
        with pytest.raises(MalformedHierarchySpec):
            parse_hierarchies(option)


class TestParseDataTypes:

    def test_all_type_names(self):
        assert parse_data_types("a=STRING,b=INTEGER,c=DECIMAL(#.##),d=DATE(dd.MM.yyyy)") == {
            "a": DataType(DataTypeName.STRING),
            "b": DataType(DataTypeName.INTEGER),
            "c": DataType(DataTypeName.DECIMAL, "#.##"),
            "d": DataType(DataTypeName.DATE, "dd.MM.yyyy"),
        }

    def test_type_name_is_case_insensitive(self):
        assert parse_data_type("date(yyyy-MM-dd)") == DataType(DataTypeName.DATE, "yyyy-MM-dd")

    def test_format_may_contain_the_separator(self):
        assert parse_data_types("income=DECIMAL(#,##0.00),age=INTEGER") == {
            "income": DataType(DataTypeName.DECIMAL, "#,##0.00"),
            "age": DataType(DataTypeName.INTEGER),
        }

    def test_missing_format_uses_default(self):
        assert parse_data_type("DECIMAL") == DataType(DataTypeName.DECIMAL)

    def test_format_of_string_is_ignored(self):
        assert parse_data_type("STRING(abc)") == DataType(DataTypeName.STRING)

    def test_last_duplicate_wins(self):
        assert parse_data_types("age=STRING,age=INTEGER") == {"age": DataType(DataTypeName.INTEGER)}

    def test_unknown_type(self):
        with pytest.raises(UnknownDataType) as exc_info:
            parse_data_types("age=NUMBER")

        assert exc_info.value.name == "NUMBER"

    @pytest.mark.parametrize("option", ["age", "age=", "age=DATE(dd", "=STRING", "age=STRING=INTEGER"])
    def test_malformed(self, option):
        with pytest.raises(MalformedDataTypeSpec):
            parse_data_types(option)

    def test_renders_like_the_option(self):
        assert str(DataType(DataTypeName.DATE, "dd.MM.yyyy")) == "DATE(dd.MM.yyyy)"
        assert str(DataType(DataTypeName.STRING)) == "STRING"


class TestParseSubset:

    def test_file(self):
        assert parse_subset("FILE=subset.csv") == Subset(SubsetKind.FILE, "subset.csv")

    def test_query_may_contain_equals_signs(self):
        assert parse_subset("query=age = '34' and sex = 'male'") == Subset(SubsetKind.QUERY, "age = '34' and sex = 'male'")

    @pytest.mark.parametrize("option", [None, "", "  "])
    def test_no_subset(self, option):
        assert parse_subset(option) is None

    def test_unknown_kind(self):
        with pytest.raises(UnknownSubsetKind) as exc_info:
            parse_subset("TABLE=subset")

        assert exc_info.value.tag == "TABLE"

    @pytest.mark.parametrize("option", ["subset.csv", "FILE=", "=subset.csv"])
    def test_malformed(self, option):
        with pytest.raises(MalformedSubsetSpec):
            parse_subset(option)


class TestParseDatabase:

    def test_full_specification(self):
        spec = parse_database("[TYPE=mysql,URL=db.local,PORT=3307,USER=anon,PASSWORD=s\\,ecret,DATABASE=census,TABLE=adults]")

        assert spec == DatabaseSpec(
            type=DatabaseType.MYSQL, database="census", table="adults",
            host="db.local", port=3307, user="anon", password="s,ecret",
        )

    def test_defaults(self):
        spec = parse_database("TYPE=MYSQL,DATABASE=census,TABLE=adults")

        assert spec.host == "localhost"
        assert spec.port is None
        assert spec.user is None

    def test_no_database(self):
        assert parse_database(None) is None

    @pytest.mark.parametrize("option", [
        "TYPE=MYSQL,TABLE=adults",
        "TYPE=ORACLE,DATABASE=census,TABLE=adults",
        "TYPE=MYSQL,DATABASE=census,TABLE=adults,PORT=abc",
        "TYPE=MYSQL,DATABASE=census,TABLE=adults,SCHEMA=x",
        "TYPE=MYSQL,DATABASE,TABLE=adults",
    ])
    def test_malformed(self, option):
        with pytest.raises(MalformedDatabaseSpec):
            parse_database(option)

    def test_password_is_not_rendered(self):
        spec = parse_database("TYPE=MYSQL,USER=anon,PASSWORD=secret,DATABASE=census,TABLE=adults")

        assert "secret" not in str(spec)


class TestScalarOptions:

    def test_attributes(self):
        assert parse_attributes("age, zipcode,sex") == ["age", "zipcode", "sex"]
        assert parse_attributes(None) == []

    def test_metric(self):
        assert parse_metric(" dmstar ") == Metric.DMSTAR
        assert parse_metric(None) == Metric.ENTROPY

    def test_unknown_metric(self):
        with pytest.raises(UnknownMetric):
            parse_metric("LOSS")

    @pytest.mark.parametrize("value, expected", [(None, 0.0), (0.05, 0.05), ("1", 1.0), (0, 0.0)])
    def test_suppression(self, value, expected):
        assert parse_suppression(value) == expected

    @pytest.mark.parametrize("value", [-0.1, 1.5, "lots"])
    def test_invalid_suppression(self, value):
        with pytest.raises(InvalidSuppression):
            parse_suppression(value)

    @pytest.mark.parametrize("value, expected", [(True, True), (None, False), ("TRUE", True), ("false", False)])
    def test_flag(self, value, expected):
        assert parse_flag(value) is expected


class TestParseSeparator:

    def test_single_character(self):
        assert parse_separator(",") == ","
        assert parse_separator("\t") == "\t"

    def test_default(self):
        assert parse_separator(None) == ";"

    def test_detect(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("a|b|c\nd|e|f\n")

        assert parse_separator("detect", str(path)) == "|"

    def test_detect_needs_a_file(self):
        with pytest.raises(InvalidSeparator):
            parse_separator("DETECT", None)

    @pytest.mark.parametrize("option", ["", ";;", "TAB"])
    def test_invalid(self, option):
        with pytest.raises(InvalidSeparator):
            parse_separator(option)


class TestParseConfig:

    def test_full_configuration(self, age_hierarchy, zip_hierarchy):
        config = parse_config({
            "quasiidentifying": "age,zipcode",
            "sensitive": "disease",
            "hierarchies": f"age={age_hierarchy},zipcode={zip_hierarchy}",
            "datatype": "age=INTEGER",
            "criteria": "[2-ANONYMITY,(0.1,0.9)-PRESENCE,zipcode=HIERARCHICAL-(0.5)-CLOSENESS]",
            "researchsubset": "QUERY=age > 40",
            "metric": "DM",
            "suppression": 0.1,
            "practicalmonotonicity": True,
        }, ';')

        assert config.qid_names == ["age", "zipcode"]
        assert config.sensitive_attr_names == ["disease"]
        assert set(config.gen_hiers) == {"age", "zipcode"}
        assert config.data_types == {"age": DataType(DataTypeName.INTEGER)}
        assert config.criteria == [KAnonymity(2), DPresence(0.1, 0.9), HierarchicalTCloseness("zipcode", 0.5)]
        assert config.subset == Subset(SubsetKind.QUERY, "age > 40")
        assert config.metric == Metric.DM
        assert config.suppression == 0.1
        assert config.practical_monotonicity is True
        assert config.separator == ';'
        assert config.attribute_roles() == {"age": "QUASI_IDENTIFYING", "zipcode": "QUASI_IDENTIFYING", "disease": "SENSITIVE"}

    def test_quasi_identifier_needs_hierarchy(self, age_hierarchy):
        with pytest.raises(MissingHierarchy) as exc_info:
            parse_config({
                "quasiidentifying": "age,zipcode",
                "hierarchies": f"age={age_hierarchy}",
                "criteria": "2-ANONYMITY",
            }, ';')

        assert exc_info.value.attribute == "zipcode"

    def test_criteria_are_required(self):
        with pytest.raises(CliError, match="criterion"):
            parse_config({"quasiidentifying": None}, ';')

    def test_option_strings_fail_before_hierarchy_files_are_read(self, tmp_path):
        with pytest.raises(UnknownMetric):
            parse_config({
                "hierarchies": f"age={tmp_path / 'missing.csv'}",
                "criteria": "2-ANONYMITY",
                "metric": "LOSS",
            }, ';')
