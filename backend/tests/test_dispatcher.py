"""Tests for tool dispatch, validation and response shaping."""

from __future__ import annotations

import json

import pytest

from colombia_mcp.mcp.dispatcher import ToolDispatcher
from colombia_mcp.mcp.registry import ToolEntry, ToolRegistry, build_tool_registry
from colombia_mcp.mcp.schema import ToolDescriptor, ToolRequest
from colombia_mcp.tools.catalog import build_tool_specs
from colombia_mcp.upstream.client import UpstreamError

from .conftest import FakeUpstream

PAGINATED_TOOLS = [
    spec for _, specs in build_tool_specs() for spec in specs if spec.name.endswith("-paginated")
]


class TestCallTool:
    @pytest.mark.asyncio
    async def test_region_by_id_returns_upstream_payload(self, dispatcher, fake_upstream) -> None:
        response = await dispatcher.call_tool(
            ToolRequest(name="get-region-by-id", arguments={"id": 3})
        )
        assert response.to_wire() == {
            "content": [{"type": "text", "text": '{"id":3,"name":"Andina"}'}],
            "isError": False,
            "_meta": {},
        }
        assert fake_upstream.calls == [("getApiV1RegionById", {"id": 3}, {})]

    @pytest.mark.asyncio
    async def test_non_ascii_payload_is_kept_verbatim(self) -> None:
        upstream = FakeUpstream({"name": "Bogotá", "surface": 1775.98})
        dispatcher = ToolDispatcher(build_tool_registry(upstream))
        response = await dispatcher.call_tool(
            ToolRequest(name="get-city-by-name", arguments={"name": "Bogotá"})
        )
        assert response.text == '{"name":"Bogotá","surface":1775.98}'
        assert upstream.calls == [("getApiV1CityNameByName", {"name": "Bogotá"}, {})]

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher) -> None:
        response = await dispatcher.call_tool(ToolRequest(name="nonexistent-tool"))
        assert response.is_error is True
        assert response.text == "Error: Unknown tool: nonexistent-tool"

    @pytest.mark.asyncio
    async def test_missing_arguments_default_to_empty(self, dispatcher, fake_upstream) -> None:
        response = await dispatcher.call_tool(ToolRequest(name="get-country-colombia"))
        assert response.is_error is False
        assert fake_upstream.calls == [("getApiV1CountryColombia", {}, {})]

    @pytest.mark.asyncio
    async def test_same_call_twice_gives_same_response(self, dispatcher) -> None:
        request = ToolRequest(name="get-regions", arguments={"sortBy": "name", "sortDirection": "asc"})
        first = await dispatcher.call_tool(request)
        second = await dispatcher.call_tool(request)
        assert first.to_wire() == second.to_wire()

    @pytest.mark.asyncio
    async def test_handler_defect_becomes_error_response(self) -> None:
        async def broken(request):
            raise RuntimeError("boom")

        registry = ToolRegistry(
            [
                ToolEntry(
                    descriptor=ToolDescriptor(name="broken-tool", description="Always fails."),
                    handler=broken,
                )
            ]
        )
        response = await ToolDispatcher(registry).call_tool(ToolRequest(name="broken-tool"))
        assert response.is_error is True
        assert response.text == "Error: boom"


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", [0, -1])
    async def test_non_positive_id_rejected_for_every_id_tool(
        self, registry, dispatcher, fake_upstream, bad_id
    ) -> None:
        id_tools = [
            descriptor.name
            for descriptor in registry.list_descriptors()
            if "id" in descriptor.input_schema["properties"]
        ]
        assert "get-region-by-id" in id_tools
        for name in id_tools:
            response = await dispatcher.call_tool(ToolRequest(name=name, arguments={"id": bad_id}))
            assert response.is_error is True, name
            assert response.text.startswith("Invalid input"), name
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_validation_message_names_the_call_and_field(self, dispatcher) -> None:
        response = await dispatcher.call_tool(
            ToolRequest(name="get-region-by-id", arguments={"id": 0})
        )
        prefix = "Invalid input: Get region by ID (id=0): "
        assert response.text.startswith(prefix)
        report = json.loads(response.text[len(prefix):])
        assert list(report) == ["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("spec", PAGINATED_TOOLS, ids=lambda spec: spec.name)
    async def test_page_zero_rejected(self, dispatcher, fake_upstream, spec) -> None:
        response = await dispatcher.call_tool(
            ToolRequest(name=spec.name, arguments={"page": 0, "pageSize": 10})
        )
        assert response.is_error is True
        assert response.text.startswith("Invalid input")
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_string_id_is_not_coerced(self, dispatcher, fake_upstream) -> None:
        response = await dispatcher.call_tool(
            ToolRequest(name="get-department-by-id", arguments={"id": "5"})
        )
        assert response.is_error is True
        assert fake_upstream.calls == []

    @pytest.mark.asyncio
    async def test_chapter_number_must_be_positive(self, dispatcher, fake_upstream) -> None:
        response = await dispatcher.call_tool(
            ToolRequest(name="get-constitution-article-by-chapter-number", arguments={"chapterNumber": 0})
        )
        assert response.is_error is True
        assert fake_upstream.calls == []


class TestUpstreamForwarding:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("spec", PAGINATED_TOOLS, ids=lambda spec: spec.name)
    async def test_pagination_renames_and_omits_absent_sort(
        self, dispatcher, fake_upstream, spec
    ) -> None:
        response = await dispatcher.call_tool(
            ToolRequest(name=spec.name, arguments={"page": 1, "pageSize": 10})
        )
        assert response.is_error is False
        assert fake_upstream.calls == [(spec.operation_id, {}, {"Page": 1, "PageSize": 10})]

    def test_every_paginated_tool_targets_a_paged_list(self) -> None:
        assert "get-city-paginated" in [spec.name for spec in PAGINATED_TOOLS]
        for spec in PAGINATED_TOOLS:
            assert spec.operation_id.endswith("PagedList"), spec.name

    @pytest.mark.asyncio
    async def test_pagination_forwards_sort_when_given(self, dispatcher, fake_upstream) -> None:
        await dispatcher.call_tool(
            ToolRequest(
                name="get-president-paginated",
                arguments={"page": 2, "pageSize": 5, "sortBy": "name", "sortDirection": "desc"},
            )
        )
        assert fake_upstream.calls == [
            (
                "getApiV1PresidentPagedList",
                {},
                {"Page": 2, "PageSize": 5, "SortBy": "name", "SortDirection": "desc"},
            )
        ]

    @pytest.mark.asyncio
    async def test_path_and_query_are_split(self, dispatcher, fake_upstream) -> None:
        await dispatcher.call_tool(
            ToolRequest(name="get-region-by-id-departments", arguments={"id": 2, "sortBy": "name"})
        )
        assert fake_upstream.calls == [
            ("getApiV1RegionByIdDepartments", {"id": 2}, {"sortBy": "name"})
        ]

    @pytest.mark.asyncio
    async def test_chapter_number_uses_upstream_path_key(self, dispatcher, fake_upstream) -> None:
        await dispatcher.call_tool(
            ToolRequest(name="get-constitution-article-by-chapter-number", arguments={"chapterNumber": 4})
        )
        assert fake_upstream.calls == [
            ("getApiV1ConstitutionArticleByChapterNumberByChapternumber", {"chapternumber": 4}, {})
        ]

    @pytest.mark.asyncio
    async def test_undeclared_arguments_are_not_forwarded(self, dispatcher, fake_upstream) -> None:
        await dispatcher.call_tool(
            ToolRequest(name="get-holiday-by-year-and-month", arguments={"year": 2024, "month": 7, "day": 20})
        )
        assert fake_upstream.calls == [
            ("getApiV1HolidayYearByYearMonthByMonth", {"year": 2024, "month": 7}, {})
        ]

    @pytest.mark.asyncio
    async def test_upstream_failure_is_labelled(self) -> None:
        upstream = FakeUpstream(
            error=UpstreamError(
                "Upstream responded with HTTP 500 Internal Server Error",
                details={"status_code": 500},
            )
        )
        dispatcher = ToolDispatcher(build_tool_registry(upstream))
        response = await dispatcher.call_tool(
            ToolRequest(name="get-region-by-id", arguments={"id": 3})
        )
        assert response.is_error is True
        assert response.text == "Get region by ID: Upstream responded with HTTP 500 Internal Server Error"

