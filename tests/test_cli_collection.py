"""Tests for collection commands."""

import json
import re

import pytest

from ecolage.cli.commands.collection import parse_value
from ecolage.cli.main import cli


def invoke(cli_runner, store, *args):
    return cli_runner.invoke(cli, ["--db-path", store.database_path, "collection", *args])


def created_id(output):
    return re.search(r"\(ID: (\w+)\)", output).group(1)


@pytest.mark.parametrize(
    "raw,expected",
    [("800000", 800000), ("true", True), ("null", None), ("GSA", "GSA"), ("Rakoto Jean", "Rakoto Jean")],
)
def test_parse_value(raw, expected):
    assert parse_value(raw) == expected


def test_add_and_list(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "add", "classes", "name=GSA", "level=Maternelle")
    assert result.exit_code == 0
    assert "Created document in 'classes'" in result.output
    doc_id = created_id(result.output)

    result = invoke(cli_runner, temp_store, "list", "classes")
    assert result.exit_code == 0
    lines = [json.loads(line) for line in result.output.strip().splitlines()]
    assert lines == [{"id": doc_id, "name": "GSA", "level": "Maternelle"}]


def test_list_live(cli_runner, temp_store, sample_classes):
    result = invoke(cli_runner, temp_store, "list", "classes", "--live")
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 3


def test_list_empty(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "list", "students")
    assert result.exit_code == 0
    assert "No documents in 'students'." in result.output


def test_update_and_delete(cli_runner, temp_store):
    employees = temp_store.collection("employees")
    doc_id = employees.create({"first_name": "Rija", "salary": 500000})

    result = invoke(cli_runner, temp_store, "update", "employees", doc_id, "salary=550000")
    assert result.exit_code == 0
    assert f"Updated 'employees/{doc_id}'" in result.output
    assert employees.get(doc_id).data == {"first_name": "Rija", "salary": 550000}

    result = invoke(cli_runner, temp_store, "delete", "employees", doc_id)
    assert result.exit_code == 0
    assert employees.get(doc_id) is None


def test_update_missing(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "update", "students", "missing", "name=x")
    assert result.exit_code == 1
    assert "Error: Document 'missing' not found in collection 'students'" in result.output


def test_malformed_field(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "add", "students", "name")
    assert result.exit_code == 1
    assert "Expected FIELD=VALUE" in result.output


def test_unknown_collection(cli_runner, temp_store):
    result = invoke(cli_runner, temp_store, "list", "payments")
    assert result.exit_code == 2
