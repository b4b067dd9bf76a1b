"""Request resolution against a package map.

A package may only require, by name, the packages it declared as direct
dependencies. Everything else installed on disk is unreachable from it.
The host loader integration calls :meth:`DependencyResolver.resolve_to_unqualified`
and then applies its own extension and index-file resolution to the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from pnpmap.errors import (
    SnapshotError,
    UndeclaredDependencyError,
    UnknownRequesterError,
    UnresolvableLocationError,
)
from pnpmap.lookup import is_path_within
from pnpmap.models.records import TOP_LEVEL_LOCATOR, PackageLocator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pnpmap.config import ResolutionSettings
    from pnpmap.package_map import PackageMap

log = structlog.get_logger()

# Bare specifier: optional @scope/ then the package name, then an optional sub-path.
# Specifiers starting with ./, ../, / (or equal to . or ..) are filesystem paths.
_REQUEST_PATTERN = re.compile(r"^(?!\.{0,2}(?:/|$))((?:@[^/]+/)?[^/]+)(/.*)?$")


@dataclass(frozen=True, slots=True)
class DependencyRequest:
    dependency_name: str
    sub_path: str = ""  # Empty, or starts with "/"


def parse_request(request: str) -> DependencyRequest | None:
    """Split a bare specifier into name and sub-path. ``None`` for path specifiers."""
    match = _REQUEST_PATTERN.match(request)
    if match is None:
        return None
    return DependencyRequest(dependency_name=match.group(1), sub_path=match.group(2) or "")


class DependencyResolver:
    """Applies the declared-dependency rule to module requests."""

    def __init__(
        self,
        package_map: PackageMap,
        *,
        builtin_modules: Iterable[str] = (),
        project_root: str | None = None,
    ) -> None:
        self._map = package_map
        self._builtins = frozenset(builtin_modules)
        # Files here that no package claims belong to the top-level project
        self._project_root = project_root

    @classmethod
    def from_settings(
        cls, package_map: PackageMap, settings: ResolutionSettings
    ) -> DependencyResolver:
        return cls(
            package_map,
            builtin_modules=settings.builtin_modules,
            project_root=settings.project_root,
        )

    def find_issuer_locator(
        self, issuer: str | None, dependency_name: str | None = None
    ) -> PackageLocator:
        """Package owning ``issuer``; the top-level project when there is no issuer path."""
        if not issuer:
            return TOP_LEVEL_LOCATOR
        locator = self._map.find_package_locator(issuer)
        if locator is None and self._project_root and is_path_within(issuer, self._project_root):
            return TOP_LEVEL_LOCATOR
        if locator is None:
            raise UnknownRequesterError(issuer, dependency_name)
        return locator

    def resolve_to_unqualified(self, request: str, issuer: str | None) -> str | None:
        """Translate ``request`` made from file ``issuer`` into a filesystem path.

        Returns ``None`` when the request is not governed by the map (builtin
        modules, relative and absolute paths) and the host loader should
        resolve it as usual.
        """
        if request in self._builtins:
            return None

        parsed = parse_request(request)
        if parsed is None:
            return None

        issuer_locator = self.find_issuer_locator(issuer, parsed.dependency_name)
        dependencies = self._map.get_package_dependencies(issuer_locator)
        if dependencies is None:
            raise SnapshotError(
                f"Package map has no record for {issuer_locator}, "
                f"so {parsed.dependency_name} cannot be resolved from it"
            )

        reference = dependencies.get(parsed.dependency_name)
        if reference is None:
            raise UndeclaredDependencyError(
                issuer_locator,
                parsed.dependency_name,
                sorted(dependencies),
            )

        dependency = PackageLocator(parsed.dependency_name, reference)
        location = self._map.get_package_location(dependency)
        if location is None:
            raise UnresolvableLocationError(issuer_locator, dependency)

        resolved = location + parsed.sub_path
        log.debug(
            "dependency_resolved",
            request=request,
            issuer=str(issuer_locator),
            path=resolved,
        )
        return resolved
