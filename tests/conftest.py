"""
Pytest fixtures shared by the anonymization CLI tests.
"""

import pytest


AGE_HIERARCHY = """34;30-39;*
35;30-39;*
41;40-49;*
47;40-49;*
"""

ZIP_HIERARCHY = """81667;8166*;816**;*
81675;8167*;816**;*
81925;8192*;819**;*
"""

ADULTS = """age;zipcode;disease
34;81667;flu
35;81675;gastritis
41;81925;flu
47;81925;cancer
"""


@pytest.fixture
def age_hierarchy(tmp_path):
    path = tmp_path / "age.csv"
    path.write_text(AGE_HIERARCHY)
    return path


@pytest.fixture
def zip_hierarchy(tmp_path):
    path = tmp_path / "zipcode.csv"
    path.write_text(ZIP_HIERARCHY)
    return path


@pytest.fixture
def adults_file(tmp_path):
    path = tmp_path / "adults.csv"
    path.write_text(ADULTS)
    return path
