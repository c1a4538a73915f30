"""Field vocabulary and composite input schemas shared by every tool.

Each tool declares its input as a tuple of `FieldSpec`s. The discovery
JSON-Schema shown to callers and the pydantic model enforced at call time are
both generated from that tuple.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Annotated, Any, Literal, Mapping, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, create_model

from .results import Failure, FailureKind, Result, Success

SORT_DIRECTIONS = ("asc", "desc")


def current_year() -> int:
    return date.today().year


def _not_after_current_year(value: int) -> int:
    latest = current_year()
    if value > latest:
        raise ValueError(f"Input should be less than or equal to {latest}")
    return value


@dataclass(frozen=True)
class FieldSpec:
    """Declarative description of one tool argument.

    `up_to_current_year` bounds an integer by the calendar year at the moment
    of validation, so a long-running process keeps accepting the new year.
    """

    name: str
    json_type: Literal["integer", "string"]
    description: str
    required: bool = True
    minimum: int | None = None
    maximum: int | None = None
    enum: tuple[str, ...] | None = None
    up_to_current_year: bool = False

    @property
    def upper_bound(self) -> int | None:
        if self.up_to_current_year:
            return current_year()
        return self.maximum

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.json_type, "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.upper_bound is not None:
            schema["maximum"] = self.upper_bound
        return schema

    def model_field(self) -> tuple[Any, Any]:
        """Return the (annotation, FieldInfo) pair used by `create_model`."""
        if self.enum:
            # pydantic rejects `strict` on Literal schemas.
            annotation: Any = Literal[self.enum]
        elif self.json_type == "integer":
            annotation = int
        else:
            annotation = str
        if self.up_to_current_year:
            annotation = Annotated[annotation, AfterValidator(_not_after_current_year)]
        if not self.required:
            annotation = Optional[annotation]
        info = Field(
            ... if self.required else None,
            description=self.description,
            strict=None if self.enum else True,
            ge=self.minimum,
            le=self.maximum,
        )
        return annotation, info


class InputSchema:
    """Ordered set of fields with matching discovery and runtime forms."""

    def __init__(self, *fields: FieldSpec, model_name: str = "ToolInput"):
        names = [spec.name for spec in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate field names in schema {model_name}: {names}")
        self.fields = tuple(fields)
        self.model: type[BaseModel] = create_model(
            model_name,
            __config__=ConfigDict(extra="ignore"),
            **{spec.name: spec.model_field() for spec in fields},
        )

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {spec.name: spec.json_schema() for spec in self.fields},
        }
        if self.required_fields:
            schema["required"] = list(self.required_fields)
        return schema

    def extract(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        """Pick the declared fields out of raw arguments; absent stays absent."""
        return {name: arguments[name] for name in self.field_names if name in arguments}

    def validate(self, values: Mapping[str, Any]) -> Result[BaseModel]:
        try:
            return Success(self.model.model_validate(dict(values)))
        except ValidationError as exc:
            report = violation_report(exc)
            return Failure(
                FailureKind.VALIDATION,
                f"{len(report)} invalid field(s): {', '.join(report)}",
                report,
            )


def violation_report(exc: ValidationError) -> dict[str, list[str]]:
    """Group every pydantic error message by the field it refers to."""
    report: dict[str, list[str]] = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
        report.setdefault(location, []).append(error.get("msg", "invalid value"))
    return report


# ----- Field constructors --------------------------------------------------


def id_field(description: str, *, name: str = "id") -> FieldSpec:
    return FieldSpec(name, "integer", description, minimum=1)


def sort_by_field() -> FieldSpec:
    return FieldSpec(
        "sortBy",
        "string",
        "It can be sorted by any of the fields that have numerical, string, or date values "
        "(for example: Id, name, description, etc.).",
        required=False,
    )


def sort_direction_field(subject: str) -> FieldSpec:
    return FieldSpec(
        "sortDirection",
        "string",
        f'Direction to sort the {subject}. Options: "asc", "desc"',
        required=False,
        enum=SORT_DIRECTIONS,
    )


def page_field() -> FieldSpec:
    return FieldSpec("page", "integer", "The page number to retrieve.", minimum=1)


def page_size_field() -> FieldSpec:
    return FieldSpec("pageSize", "integer", "The number of items per page.", minimum=1)


def required_string(name: str, description: str) -> FieldSpec:
    return FieldSpec(name, "string", description)


def year_field(description: str, *, minimum: int) -> FieldSpec:
    return FieldSpec("year", "integer", description, minimum=minimum, up_to_current_year=True)


def month_field(description: str) -> FieldSpec:
    return FieldSpec("month", "integer", description, minimum=1, maximum=12)


def chapter_number_field(description: str) -> FieldSpec:
    return FieldSpec("chapterNumber", "integer", description, minimum=1)


# ----- Composite schemas ---------------------------------------------------


def empty() -> InputSchema:
    return InputSchema(model_name="EmptyInput")


def id_only(description: str) -> InputSchema:
    return InputSchema(id_field(description), model_name="IdInput")


def sort_only(subject: str) -> InputSchema:
    return InputSchema(sort_by_field(), sort_direction_field(subject), model_name="SortInput")


def id_with_sort(description: str, subject: str) -> InputSchema:
    return InputSchema(
        id_field(description),
        sort_by_field(),
        sort_direction_field(subject),
        model_name="IdWithSortInput",
    )


def page_with_sort(subject: str) -> InputSchema:
    return InputSchema(
        page_field(),
        page_size_field(),
        sort_by_field(),
        sort_direction_field(subject),
        model_name="PageWithSortInput",
    )


def name_only(description: str) -> InputSchema:
    return InputSchema(required_string("name", description), model_name="NameInput")


def keyword_only(description: str) -> InputSchema:
    return InputSchema(required_string("keyword", description), model_name="KeywordInput")
