from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pnpmap.models.graph import PackageManifest, ResolvedPattern


class GraphSource(Protocol):
    """Already-resolved dependency graph, provided by the package resolver."""

    def get_topological_manifests(self, seed_patterns: Sequence[str]) -> Iterable[PackageManifest]:
        """Packages reachable from the seed patterns, in topological order."""
        ...

    def get_strict_resolved_pattern(self, pattern: str) -> ResolvedPattern:
        """Resolve a dependency pattern. Raises ``LookupError`` when unknown."""
        ...
