"""Registry that stores tool descriptors and their handlers."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from .handlers import ToolHandler, build_handler
from .schema import ToolDescriptor

if TYPE_CHECKING:
    from ..upstream.client import UpstreamClient


class DuplicateToolError(ValueError):
    """Raised when two registered tools share a name."""


@dataclass(frozen=True)
class ToolEntry:
    descriptor: ToolDescriptor
    handler: ToolHandler
    group: str = "default"

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Immutable, ordered mapping of tool name to descriptor and handler."""

    def __init__(self, entries: Iterable[ToolEntry]):
        table: dict[str, ToolEntry] = {}
        for entry in entries:
            if entry.name in table:
                raise DuplicateToolError(
                    f"duplicate tool name {entry.name} "
                    f"(groups {table[entry.name].group} and {entry.group})"
                )
            table[entry.name] = entry
        self._entries: Mapping[str, ToolEntry] = MappingProxyType(table)

    @classmethod
    def from_groups(
        cls, groups: Iterable[tuple[str, Sequence[tuple[ToolDescriptor, ToolHandler]]]]
    ) -> "ToolRegistry":
        """Merge tagged `(descriptor, handler)` groups, preserving declaration order."""
        return cls(
            ToolEntry(descriptor=descriptor, handler=handler, group=group)
            for group, pairs in groups
            for descriptor, handler in pairs
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def get(self, name: str) -> ToolEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    def list_descriptors(self) -> list[ToolDescriptor]:
        return [entry.descriptor for entry in self._entries.values()]

    def describe(self) -> Mapping[str, ToolEntry]:
        """Read-only view of the table (mainly for diagnostics)."""
        return self._entries


def build_tool_registry(upstream: "UpstreamClient") -> ToolRegistry:
    """Build the registry for every catalog tool, bound to `upstream`."""
    from ..tools.catalog import build_tool_specs

    return ToolRegistry.from_groups(
        (group, [(spec.descriptor(), build_handler(spec, upstream)) for spec in specs])
        for group, specs in build_tool_specs()
    )
