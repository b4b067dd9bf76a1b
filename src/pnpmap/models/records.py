from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class PackageLocator:
    """Identity of a resolved package: ``(name, reference)``.

    ``PackageLocator(None, None)`` stands for the top-level project.
    """

    name: str | None
    reference: str | None

    @property
    def is_top_level(self) -> bool:
        return self.name is None

    def __str__(self) -> str:
        if self.is_top_level:
            return "<top-level>"
        return f"{self.name}@{self.reference}"


TOP_LEVEL_LOCATOR = PackageLocator(None, None)


@dataclass(frozen=True, slots=True)
class PackageInformation:
    location: str | None  # None only for the top-level project
    # dependency name → reference this package resolved it to
    dependencies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.dependencies, MappingProxyType):
            object.__setattr__(self, "dependencies", MappingProxyType(dict(self.dependencies)))
