"""Declarative tool catalog for the api-colombia.com resources.

Most resources expose the same family of tools (list, by id, by name, keyword
search, paginated list). `ResourceFamily` generates that family from a few
strings; anything outside the family is declared as an explicit `ToolSpec`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from ..mcp import fields
from ..mcp.fields import InputSchema
from ..mcp.schema import ToolDescriptor

SORT_QUERY: Mapping[str, str] = {"sortBy": "sortBy", "sortDirection": "sortDirection"}
PAGED_QUERY: Mapping[str, str] = {
    "page": "Page",
    "pageSize": "PageSize",
    "sortBy": "SortBy",
    "sortDirection": "SortDirection",
}
ID_PATH: Mapping[str, str] = {"id": "id"}


@dataclass(frozen=True)
class ToolSpec:
    """Static declaration of one tool and the upstream operation behind it.

    `path_params` and `query_params` map validated field names to the keys the
    upstream operation expects.
    """

    name: str
    description: str
    label: str
    schema: InputSchema
    operation_id: str
    path_params: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.schema.json_schema(),
        )


@dataclass(frozen=True)
class ResourceFamily:
    """Generates the canonical tool family for one upstream resource."""

    key: str
    slug: str
    singular: str
    plural: str
    list_tool: str | None = None
    list_description: str = ""
    by_id: bool = True
    by_name: bool = True
    search_description: str | None = None
    keyword_description: str | None = None
    paginated: bool = True
    extras: tuple[ToolSpec, ...] = ()

    def operation(self, suffix: str = "") -> str:
        return f"getApiV1{self.key}{suffix}"

    def tool_specs(self) -> list[ToolSpec]:
        specs: list[ToolSpec] = []
        if self.list_tool:
            specs.append(
                ToolSpec(
                    name=self.list_tool,
                    description=self.list_description,
                    label=f"Get {self.plural}",
                    schema=fields.sort_only(self.plural),
                    operation_id=self.operation(),
                    query_params=SORT_QUERY,
                )
            )
        if self.by_id:
            specs.append(
                ToolSpec(
                    name=f"get-{self.slug}-by-id",
                    description=f"Get a specific {self.singular} information by its ID.",
                    label=f"Get {self.singular} by ID",
                    schema=fields.id_only(f"The ID of the {self.singular} to retrieve."),
                    operation_id=self.operation("ById"),
                    path_params=ID_PATH,
                )
            )
        if self.by_name:
            specs.append(
                ToolSpec(
                    name=f"get-{self.slug}-by-name",
                    description=f"Get a specific {self.singular} information by its name.",
                    label=f"Get {self.singular} by name",
                    schema=fields.name_only(f"The name of the {self.singular} to retrieve."),
                    operation_id=self.operation("NameByName"),
                    path_params={"name": "name"},
                )
            )
        if self.search_description:
            specs.append(
                ToolSpec(
                    name=f"search-{self.slug}-by-keyword",
                    description=self.search_description,
                    label=f"Search {self.singular} by keyword",
                    schema=fields.keyword_only(
                        self.keyword_description or f"The keyword to search for in {self.plural}."
                    ),
                    operation_id=self.operation("SearchByKeyword"),
                    path_params={"keyword": "keyword"},
                )
            )
        if self.paginated:
            specs.append(
                ToolSpec(
                    name=f"get-{self.slug}-paginated",
                    description=(
                        f"Get a paginated list of {self.plural} in Colombia, using pagination "
                        "including page, pageSize, total records and data"
                    ),
                    label=f"Get paginated {self.plural}",
                    schema=fields.page_with_sort(self.plural),
                    operation_id=self.operation("PagedList"),
                    query_params=PAGED_QUERY,
                )
            )
        specs.extend(self.extras)
        return specs


def _families() -> list[ResourceFamily]:
    return [
        ResourceFamily(
            key="Country",
            slug="country",
            singular="country",
            plural="countries",
            by_id=False,
            by_name=False,
            paginated=False,
            extras=(
                ToolSpec(
                    name="get-country-colombia",
                    description=(
                        "Get The information about Colombia like TimeZone, Languages, Currency, etc."
                    ),
                    label="Get country colombia data",
                    schema=fields.empty(),
                    operation_id="getApiV1CountryColombia",
                ),
            ),
        ),
        ResourceFamily(
            key="Region",
            slug="region",
            singular="region",
            plural="regions",
            list_tool="get-regions",
            list_description="Get the list of regions in Colombia.",
            by_name=False,
            paginated=False,
            extras=(
                ToolSpec(
                    name="get-region-by-id-departments",
                    description="Get a specific region information by its ID including departments.",
                    label="Get region by ID including departments",
                    schema=fields.id_with_sort("The ID of the region to retrieve.", "departments"),
                    operation_id="getApiV1RegionByIdDepartments",
                    path_params=ID_PATH,
                    query_params=SORT_QUERY,
                ),
            ),
        ),
        ResourceFamily(
            key="Department",
            slug="department",
            singular="department",
            plural="departments",
            list_tool="get-departments",
            list_description="Get the list of departments in Colombia.",
            by_name=False,
            paginated=False,
        ),
        ResourceFamily(
            key="City",
            slug="city",
            singular="city",
            plural="cities",
            list_tool="get-cities",
            list_description=(
                "Get the list of cities in Colombia including general info like description, "
                "department, Surface city, etc"
            ),
            search_description=(
                "Search for cities by a keyword in their name, description or PostalCode."
            ),
            keyword_description=(
                "The keyword to search for in city names, description or PostalCode."
            ),
        ),
        ResourceFamily(
            key="President",
            slug="president",
            singular="president",
            plural="presidents",
            list_tool="get-presidents",
            list_description=(
                "Get the list of presidents in Colombia, including general info like political "
                "party, city, start period, etc"
            ),
            search_description=(
                "Search for presidents by a keyword in their name, last name, description or "
                "political party."
            ),
            keyword_description=(
                "The keyword to search for in president name, last name, description or "
                "political party."
            ),
            extras=(
                ToolSpec(
                    name="get-president-by-year",
                    description="Get the president or presidents in the provided year",
                    label="Get president by year",
                    schema=InputSchema(
                        fields.year_field("The year of the president to retrieve.", minimum=1900),
                        model_name="PresidentYearInput",
                    ),
                    operation_id="getApiV1PresidentYearByYear",
                    path_params={"year": "year"},
                ),
            ),
        ),
        ResourceFamily(
            key="TouristicAttraction",
            slug="touristic-attraction",
            singular="touristic attraction",
            plural="touristic attractions",
            list_tool="get-touristic-attractions",
            list_description=(
                "Get the list of touristic attractions in Colombia, including information about "
                "the city where they are located, the latitude, longitude and image"
            ),
            search_description=(
                "Search for touristic attractions by a keyword in their Name, Description, "
                "Latitude or Longitude"
            ),
            keyword_description=(
                "The keyword to search for in touristic attraction name, description, latitude "
                "or longitude."
            ),
        ),
        ResourceFamily(
            key="CategoryNaturalArea",
            slug="category-natural-area",
            singular="category natural area",
            plural="category natural areas",
            list_tool="get-category-natural-areas",
            list_description="Get the list of category natural areas in Colombia",
            by_name=False,
            paginated=False,
            extras=(
                ToolSpec(
                    name="get-category-natural-area-by-id-natural-areas",
                    description=(
                        "Get the category natural area with the provided ID including its "
                        "natural areas"
                    ),
                    label="Get category natural area by ID natural areas",
                    schema=fields.id_only("The ID of the category natural area to retrieve."),
                    operation_id="getApiV1CategoryNaturalAreaByIdNaturalAreas",
                    path_params=ID_PATH,
                ),
            ),
        ),
        ResourceFamily(
            key="NaturalArea",
            slug="natural-area",
            singular="natural area",
            plural="natural areas",
            list_tool="get-natural-areas",
            list_description="Get the list of natural areas in Colombia.",
            search_description=(
                "Search for natural areas by a keyword in their name or description."
            ),
            keyword_description="The keyword to search for in natural area names or description.",
        ),
        ResourceFamily(
            key="Map",
            slug="map",
            singular="map",
            plural="maps",
            list_tool="get-maps",
            list_description=(
                "Get the list of maps in Colombia, including natural areas, departments "
                "distribution, water, etc."
            ),
            by_name=False,
            paginated=False,
        ),
        ResourceFamily(
            key="Airport",
            slug="airport",
            singular="airport",
            plural="airports",
            list_tool="get-airports",
            list_description=(
                "Get the list of airports in Colombia, including general info like name, "
                "description, images, etc"
            ),
            search_description=(
                "Search for airports by a keyword in their name, description or city."
            ),
            keyword_description="The keyword to search for in airport names, description or city.",
        ),
        ResourceFamily(
            key="ConstitutionArticle",
            slug="constitution-article",
            singular="Constitution Article",
            plural="Constitution Articles",
            list_tool="get-constitution-articles",
            list_description=(
                "Get the list of Constitution Articles in Colombia, including general info like "
                "title, chapter number and content"
            ),
            by_name=False,
            search_description=(
                "Search for Constitution Articles by a keyword in their title, chapter number or "
                "content"
            ),
            keyword_description=(
                "The keyword to search for in Constitution Articles title, chapter number or "
                "content."
            ),
            extras=(
                ToolSpec(
                    name="get-constitution-article-by-chapter-number",
                    description=(
                        "Get a specific Constitution Article information by its chapter number."
                    ),
                    label="Get constitution article by chapter number",
                    schema=InputSchema(
                        fields.chapter_number_field(
                            "The chapter number of the Constitution Article to retrieve."
                        ),
                        model_name="ChapterNumberInput",
                    ),
                    operation_id="getApiV1ConstitutionArticleByChapterNumberByChapternumber",
                    path_params={"chapterNumber": "chapternumber"},
                ),
            ),
        ),
        ResourceFamily(
            key="Holiday",
            slug="holiday",
            singular="holiday",
            plural="holidays",
            by_id=False,
            by_name=False,
            paginated=False,
            extras=(
                ToolSpec(
                    name="get-holiday-by-year",
                    description="Get the list of holidays per year in Colombia",
                    label="Get holiday by year",
                    schema=InputSchema(
                        fields.year_field("The year of the holiday to retrieve.", minimum=1819),
                        model_name="HolidayYearInput",
                    ),
                    operation_id="getApiV1HolidayYearByYear",
                    path_params={"year": "year"},
                ),
                ToolSpec(
                    name="get-holiday-by-year-and-month",
                    description="Get the list of holidays per year and month in Colombia",
                    label="Get holiday by year and month",
                    schema=InputSchema(
                        fields.year_field("The year of the holiday to retrieve.", minimum=1819),
                        fields.month_field("The month of the holiday to retrieve."),
                        model_name="HolidayYearMonthInput",
                    ),
                    operation_id="getApiV1HolidayYearByYearMonthByMonth",
                    path_params={"year": "year", "month": "month"},
                ),
            ),
        ),
        ResourceFamily(
            key="IndigenousReservation",
            slug="indigenous-reservation",
            singular="indigenous reservation",
            plural="indigenous reservations",
            list_tool="get-indigenous-reservations",
            list_description=(
                "Get the list of indigenous reservations in Colombia, including general info "
                "like name, description, images, etc"
            ),
            search_description=(
                "Search for indigenous reservations by a keyword in their name, description or "
                "languages."
            ),
            keyword_description=(
                "The keyword to search for in indigenous reservation names, description or "
                "languages."
            ),
        ),
        ResourceFamily(
            key="InvasiveSpecie",
            slug="invasive-specie",
            singular="invasive specie",
            plural="invasive species",
            list_tool="get-invasive-species",
            list_description="Get the list of invasive species in Colombia.",
            search_description=(
                "Search for invasive species by a keyword in their name, common name or manage."
            ),
            keyword_description=(
                "The keyword to search for in invasive species name, common name or manage"
            ),
        ),
        ResourceFamily(
            key="NativeCommunity",
            slug="native-community",
            singular="native community",
            plural="native communities",
            list_tool="get-native-communities",
            list_description=(
                "Get the list of native communities in Colombia, including general info like "
                "name, description, images, etc"
            ),
            search_description=(
                "Search for native communities by a keyword in their name, description or "
                "languages"
            ),
            keyword_description=(
                "The keyword to search for in native community names, descriptions or languages."
            ),
        ),
        ResourceFamily(
            key="Radio",
            slug="radio",
            singular="radio",
            plural="radios",
            list_tool="get-radios",
            list_description=(
                "Get the list of radios in Colombia, including general info like name, url, "
                "frequency, etc."
            ),
            search_description=(
                "Search for radios by a keyword in their name, frequency, URL or streaming."
            ),
            keyword_description=(
                "The keyword to search for in radio name, frequency, URL or streaming."
            ),
        ),
        ResourceFamily(
            key="TraditionalFairAndFestival",
            slug="traditional-fair-and-festival",
            singular="traditional fair and festival",
            plural="traditional fairs and festivals",
            list_tool="get-traditional-fairs-and-festivals",
            list_description=(
                "Get the list of traditional fairs and festivals in Colombia, including general "
                "info like name, description and city"
            ),
            search_description=(
                "Search for traditional fairs and festivals by a keyword in their name or "
                "description."
            ),
            keyword_description=(
                "The keyword to search for in traditional fair and festival names or descriptions."
            ),
            extras=(
                ToolSpec(
                    name="get-traditional-fair-and-festival-by-id-city",
                    description="Get a list of traditional fair and festival filtered by City Id.",
                    label="Get traditional fair and festival by city ID",
                    schema=fields.id_with_sort(
                        "The ID of the city to retrieve.", "traditional fairs and festivals"
                    ),
                    operation_id="getApiV1TraditionalFairAndFestivalByIdCity",
                    path_params=ID_PATH,
                    query_params=SORT_QUERY,
                ),
            ),
        ),
        ResourceFamily(
            key="TypicalDish",
            slug="typical-dish",
            singular="typical dish",
            plural="typical dishes",
            # Name kept as published so existing clients keep resolving it.
            list_tool="get-typical-dishs",
            list_description=(
                "Get the list of typical dishes in Colombia including general info like "
                "description and image reference."
            ),
            search_description=(
                "Search for typical dishes by a keyword in their name or description."
            ),
            keyword_description=(
                "The keyword to search for in typical dish names or descriptions."
            ),
            extras=(
                ToolSpec(
                    name="get-typical-dish-by-id-department",
                    description="Get a list of typical dishes filtered by department ID",
                    label="Get typical dish by department ID",
                    schema=fields.id_with_sort(
                        "The ID of the department to retrieve from the typical dish.",
                        "typical dishes",
                    ),
                    operation_id="getApiV1TypicalDishByIdDepartment",
                    path_params=ID_PATH,
                    query_params=SORT_QUERY,
                ),
            ),
        ),
    ]


def build_tool_specs() -> list[tuple[str, list[ToolSpec]]]:
    """Return the tool groups in registration order, keyed by resource slug."""
    return [(family.slug, family.tool_specs()) for family in _families()]
