import asyncio

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from student_management_api.app.tools.server import create_mcp_server
from student_management_api.app.tools.student_tools import StudentTools, parse_date

TOOL_NAMES = {
    "create_student",
    "get_student",
    "get_all_students",
    "get_students_by_department",
    "update_student",
    "delete_student",
}


@pytest.fixture
def tools(service):
    return StudentTools(service)


def test_create_parses_date_and_returns_api_shape(tools):
    record = tools.create_student(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@x.com",
        date_of_birth="1815-12-10",
        department="Math",
        enrollment_year=1833,
    )

    assert record["firstName"] == "Ada"
    assert record["dateOfBirth"] == "1815-12-10"
    assert record["enrollmentYear"] == 1833
    assert record["createdAt"] == record["updatedAt"]


def test_create_with_bad_date_is_tool_error(tools):
    with pytest.raises(ToolError) as excinfo:
        tools.create_student(first_name="Ada", last_name="Lovelace", email="ada@x.com", date_of_birth="10/12/1815")

    assert str(excinfo.value).startswith("Bad Request:")
    assert tools.get_all_students() == []


def test_create_blank_name_is_tool_error(tools):
    with pytest.raises(ToolError, match="First name is required"):
        tools.create_student(first_name=" ", last_name="Lovelace", email="ada@x.com")


def test_duplicate_email_is_conflict_tool_error(tools):
    tools.create_student(first_name="Ada", last_name="Lovelace", email="ada@x.com")

    with pytest.raises(ToolError, match="^Conflict: Email already exists: ada@x.com$"):
        tools.create_student(first_name="Other", last_name="Person", email="ada@x.com")


def test_get_and_list(tools):
    ada = tools.create_student(first_name="Ada", last_name="Lovelace", email="ada@x.com", department="Math")
    tools.create_student(first_name="Alan", last_name="Turing", email="alan@x.com", department="CS")

    assert tools.get_student(ada["id"]) == ada
    assert [s["email"] for s in tools.get_all_students()] == ["ada@x.com", "alan@x.com"]
    assert tools.get_students_by_department("CS")[0]["firstName"] == "Alan"
    assert tools.get_students_by_department("Biology") == []


def test_update_only_touches_supplied_arguments(tools):
    ada = tools.create_student(
        first_name="Ada", last_name="Lovelace", email="ada@x.com", date_of_birth="1815-12-10"
    )

    updated = tools.update_student(ada["id"], department="CS", date_of_birth=None)

    assert updated["department"] == "CS"
    assert updated["dateOfBirth"] == "1815-12-10"
    assert updated["email"] == "ada@x.com"
    assert updated["updatedAt"] != ada["updatedAt"]


def test_delete_returns_confirmation(tools):
    ada = tools.create_student(first_name="Ada", last_name="Lovelace", email="ada@x.com")

    message = tools.delete_student(ada["id"])

    assert message == f"Student with id {ada['id']} has been deleted successfully."
    with pytest.raises(ToolError, match="^Not Found: Student not found with id"):
        tools.get_student(ada["id"])


def test_unknown_id_is_not_found_tool_error(tools):
    with pytest.raises(ToolError, match="Not Found"):
        tools.delete_student(123)


@pytest.mark.parametrize("value, expected", [(None, None), ("", None), ("  ", None)])
def test_parse_date_treats_blank_as_absent(value, expected):
    assert parse_date(value) is expected


def test_server_registers_all_tools(service):
    server = create_mcp_server(service, name="students-test")

    tools = asyncio.run(server.list_tools())

    assert {tool.name for tool in tools} == TOOL_NAMES
    create = next(tool for tool in tools if tool.name == "create_student")
    assert create.description == "Create a new student record with the given details."
    assert {"first_name", "last_name", "email"} <= set(create.inputSchema["required"])
    assert "self" not in create.inputSchema["properties"]


def test_id_beyond_storage_range_is_not_found_tool_error(tools):
    with pytest.raises(ToolError, match="^Not Found: "):
        tools.get_student(2**70)
