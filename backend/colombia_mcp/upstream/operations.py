"""Upstream REST operations exposed by api-colombia.com (v1)."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote


@dataclass(frozen=True)
class UpstreamOperation:
    """One upstream endpoint, identified by its OpenAPI operation id."""

    operation_id: str
    path_template: str
    method: str = "GET"

    @property
    def path_keys(self) -> tuple[str, ...]:
        return tuple(
            field_name
            for _, field_name, _, _ in string.Formatter().parse(self.path_template)
            if field_name
        )

    def render_path(self, path: Mapping[str, Any] | None = None) -> str:
        values = dict(path or {})
        missing = [key for key in self.path_keys if values.get(key) is None]
        if missing:
            raise ValueError(f"{self.operation_id} requires path parameters {missing}")
        encoded = {key: quote(str(values[key]), safe="") for key in self.path_keys}
        return self.path_template.format(**encoded)


def _op(operation_id: str, path_template: str) -> UpstreamOperation:
    return UpstreamOperation(operation_id=operation_id, path_template=path_template)


OPERATIONS: dict[str, UpstreamOperation] = {
    op.operation_id: op
    for op in (
        _op("getApiV1CountryColombia", "/api/v1/Country/Colombia"),
        _op("getApiV1Region", "/api/v1/Region"),
        _op("getApiV1RegionById", "/api/v1/Region/{id}"),
        _op("getApiV1RegionByIdDepartments", "/api/v1/Region/{id}/departments"),
        _op("getApiV1Department", "/api/v1/Department"),
        _op("getApiV1DepartmentById", "/api/v1/Department/{id}"),
        _op("getApiV1City", "/api/v1/City"),
        _op("getApiV1CityById", "/api/v1/City/{id}"),
        _op("getApiV1CityNameByName", "/api/v1/City/name/{name}"),
        _op("getApiV1CitySearchByKeyword", "/api/v1/City/search/{keyword}"),
        _op("getApiV1CityPagedList", "/api/v1/City/pagedList"),
        _op("getApiV1President", "/api/v1/President"),
        _op("getApiV1PresidentById", "/api/v1/President/{id}"),
        _op("getApiV1PresidentNameByName", "/api/v1/President/name/{name}"),
        _op("getApiV1PresidentYearByYear", "/api/v1/President/year/{year}"),
        _op("getApiV1PresidentSearchByKeyword", "/api/v1/President/search/{keyword}"),
        _op("getApiV1PresidentPagedList", "/api/v1/President/pagedList"),
        _op("getApiV1TouristicAttraction", "/api/v1/TouristicAttraction"),
        _op("getApiV1TouristicAttractionById", "/api/v1/TouristicAttraction/{id}"),
        _op("getApiV1TouristicAttractionNameByName", "/api/v1/TouristicAttraction/name/{name}"),
        _op(
            "getApiV1TouristicAttractionSearchByKeyword",
            "/api/v1/TouristicAttraction/search/{keyword}",
        ),
        _op("getApiV1TouristicAttractionPagedList", "/api/v1/TouristicAttraction/pagedList"),
        _op("getApiV1CategoryNaturalArea", "/api/v1/CategoryNaturalArea"),
        _op("getApiV1CategoryNaturalAreaById", "/api/v1/CategoryNaturalArea/{id}"),
        _op(
            "getApiV1CategoryNaturalAreaByIdNaturalAreas",
            "/api/v1/CategoryNaturalArea/{id}/NaturalAreas",
        ),
        _op("getApiV1NaturalArea", "/api/v1/NaturalArea"),
        _op("getApiV1NaturalAreaById", "/api/v1/NaturalArea/{id}"),
        _op("getApiV1NaturalAreaNameByName", "/api/v1/NaturalArea/name/{name}"),
        _op("getApiV1NaturalAreaSearchByKeyword", "/api/v1/NaturalArea/search/{keyword}"),
        _op("getApiV1NaturalAreaPagedList", "/api/v1/NaturalArea/pagedList"),
        _op("getApiV1Map", "/api/v1/Map"),
        _op("getApiV1MapById", "/api/v1/Map/{id}"),
        _op("getApiV1Airport", "/api/v1/Airport"),
        _op("getApiV1AirportById", "/api/v1/Airport/{id}"),
        _op("getApiV1AirportNameByName", "/api/v1/Airport/name/{name}"),
        _op("getApiV1AirportSearchByKeyword", "/api/v1/Airport/search/{keyword}"),
        _op("getApiV1AirportPagedList", "/api/v1/Airport/pagedList"),
        _op("getApiV1ConstitutionArticle", "/api/v1/ConstitutionArticle"),
        _op("getApiV1ConstitutionArticleById", "/api/v1/ConstitutionArticle/{id}"),
        _op(
            "getApiV1ConstitutionArticleSearchByKeyword",
            "/api/v1/ConstitutionArticle/search/{keyword}",
        ),
        _op("getApiV1ConstitutionArticlePagedList", "/api/v1/ConstitutionArticle/pagedList"),
        _op(
            "getApiV1ConstitutionArticleByChapterNumberByChapternumber",
            "/api/v1/ConstitutionArticle/ByChapterNumber/{chapternumber}",
        ),
        _op("getApiV1HolidayYearByYear", "/api/v1/Holiday/year/{year}"),
        _op("getApiV1HolidayYearByYearMonthByMonth", "/api/v1/Holiday/year/{year}/month/{month}"),
        _op("getApiV1IndigenousReservation", "/api/v1/IndigenousReservation"),
        _op("getApiV1IndigenousReservationById", "/api/v1/IndigenousReservation/{id}"),
        _op(
            "getApiV1IndigenousReservationNameByName",
            "/api/v1/IndigenousReservation/name/{name}",
        ),
        _op(
            "getApiV1IndigenousReservationSearchByKeyword",
            "/api/v1/IndigenousReservation/search/{keyword}",
        ),
        _op("getApiV1IndigenousReservationPagedList", "/api/v1/IndigenousReservation/pagedList"),
        _op("getApiV1InvasiveSpecie", "/api/v1/InvasiveSpecie"),
        _op("getApiV1InvasiveSpecieById", "/api/v1/InvasiveSpecie/{id}"),
        _op("getApiV1InvasiveSpecieNameByName", "/api/v1/InvasiveSpecie/name/{name}"),
        _op("getApiV1InvasiveSpecieSearchByKeyword", "/api/v1/InvasiveSpecie/search/{keyword}"),
        _op("getApiV1InvasiveSpeciePagedList", "/api/v1/InvasiveSpecie/pagedList"),
        _op("getApiV1NativeCommunity", "/api/v1/NativeCommunity"),
        _op("getApiV1NativeCommunityById", "/api/v1/NativeCommunity/{id}"),
        _op("getApiV1NativeCommunityNameByName", "/api/v1/NativeCommunity/name/{name}"),
        _op("getApiV1NativeCommunitySearchByKeyword", "/api/v1/NativeCommunity/search/{keyword}"),
        _op("getApiV1NativeCommunityPagedList", "/api/v1/NativeCommunity/pagedList"),
        _op("getApiV1Radio", "/api/v1/Radio"),
        _op("getApiV1RadioById", "/api/v1/Radio/{id}"),
        _op("getApiV1RadioNameByName", "/api/v1/Radio/name/{name}"),
        _op("getApiV1RadioSearchByKeyword", "/api/v1/Radio/search/{keyword}"),
        _op("getApiV1RadioPagedList", "/api/v1/Radio/pagedList"),
        _op("getApiV1TraditionalFairAndFestival", "/api/v1/TraditionalFairAndFestival"),
        _op("getApiV1TraditionalFairAndFestivalById", "/api/v1/TraditionalFairAndFestival/{id}"),
        _op(
            "getApiV1TraditionalFairAndFestivalByIdCity",
            "/api/v1/TraditionalFairAndFestival/{id}/city",
        ),
        _op(
            "getApiV1TraditionalFairAndFestivalNameByName",
            "/api/v1/TraditionalFairAndFestival/name/{name}",
        ),
        _op(
            "getApiV1TraditionalFairAndFestivalSearchByKeyword",
            "/api/v1/TraditionalFairAndFestival/search/{keyword}",
        ),
        _op(
            "getApiV1TraditionalFairAndFestivalPagedList",
            "/api/v1/TraditionalFairAndFestival/pagedList",
        ),
        _op("getApiV1TypicalDish", "/api/v1/TypicalDish"),
        _op("getApiV1TypicalDishById", "/api/v1/TypicalDish/{id}"),
        _op("getApiV1TypicalDishByIdDepartment", "/api/v1/TypicalDish/{id}/department"),
        _op("getApiV1TypicalDishNameByName", "/api/v1/TypicalDish/name/{name}"),
        _op("getApiV1TypicalDishSearchByKeyword", "/api/v1/TypicalDish/search/{keyword}"),
        _op("getApiV1TypicalDishPagedList", "/api/v1/TypicalDish/pagedList"),
    )
}


def get_operation(operation_id: str) -> UpstreamOperation:
    try:
        return OPERATIONS[operation_id]
    except KeyError:
        raise KeyError(f"unknown upstream operation {operation_id}") from None
