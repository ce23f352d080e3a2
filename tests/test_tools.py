from __future__ import annotations

from pyzonar.tools import FETCH, GET_BUS_LOCATION, SEARCH, TOOLS, get_tool, list_tools


def test_registry_lists_the_three_tools() -> None:
    assert [tool["name"] for tool in list_tools()] == [GET_BUS_LOCATION, SEARCH, FETCH]


def test_descriptors_have_schemas() -> None:
    for descriptor in list_tools():
        assert set(descriptor) == {"name", "description", "input_schema", "output_schema"}
        assert descriptor["description"]
        assert descriptor["input_schema"]["type"] == "object"
        assert descriptor["output_schema"]["type"] == "object"


def test_bus_location_schema_requires_bus_id() -> None:
    tool = get_tool(GET_BUS_LOCATION)

    assert tool is not None
    assert tool.input_schema["required"] == ["bus_id"]
    assert tool.input_schema["properties"]["id_type"]["enum"] == ["fleet", "dbid", "vin", "tag"]


def test_unknown_tool_lookup() -> None:
    assert get_tool("does_not_exist") is None


def test_listing_returns_copies() -> None:
    listed = list_tools()
    listed[0]["input_schema"]["required"].append("mutated")

    assert TOOLS[0].input_schema["required"] == ["bus_id"]
