"""Shared fixtures: an in-memory graph resolver and sample dependency graphs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import pytest

from pnpmap.builder import build_package_map
from pnpmap.models.graph import PackageManifest, PackageReference, ResolvedPattern
from pnpmap.package_map import PackageMap


class FakeResolver:
    """GraphSource over a fixed manifest list and pattern table."""

    def __init__(
        self,
        manifests: list[PackageManifest],
        patterns: dict[str, ResolvedPattern | None],
    ) -> None:
        self.manifests = manifests
        self.patterns = patterns
        self.requested_seeds: list[Sequence[str]] = []

    def get_topological_manifests(self, seed_patterns: Sequence[str]) -> Iterable[PackageManifest]:
        self.requested_seeds.append(seed_patterns)
        return list(self.manifests)

    def get_strict_resolved_pattern(self, pattern: str) -> ResolvedPattern | None:
        # KeyError is a LookupError, the documented failure mode
        return self.patterns[pattern]


def manifest(
    name: str,
    version: str,
    location: str | None,
    dependencies: list[str] | None = None,
    *,
    is_plugnplay: bool = True,
) -> PackageManifest:
    return PackageManifest(
        name=name,
        version=version,
        reference=PackageReference(
            location=location,
            is_plugnplay=is_plugnplay,
            dependencies=dependencies or [],
        ),
    )


@pytest.fixture()
def sample_resolver() -> FakeResolver:
    """app → left-pad@1.0.0, outer@1.0.0; outer → inner@2.0.0, left-pad@1.0.0.

    ``chalk`` is installed but declared by nobody, and ``inner`` is installed
    inside ``outer``'s directory.
    """
    manifests = [
        manifest("left-pad", "1.0.0", "/store/left-pad-1.0.0"),
        manifest("chalk", "2.4.2", "/store/chalk-2.4.2"),
        manifest(
            "inner",
            "2.0.0",
            "/store/outer-1.0.0/node_modules/inner",
        ),
        manifest(
            "outer",
            "1.0.0",
            "/store/outer-1.0.0",
            ["inner@^2.0.0", "left-pad@^1.0.0"],
        ),
        manifest("@scope/tool", "3.1.0", "/store/@scope/tool-3.1.0", ["chalk@^2.4.0"]),
    ]
    patterns = {
        "left-pad@^1.0.0": ResolvedPattern(name="left-pad", version="1.0.0"),
        "chalk@^2.4.0": ResolvedPattern(name="chalk", version="2.4.2"),
        "inner@^2.0.0": ResolvedPattern(name="inner", version="2.0.0"),
        "outer@^1.0.0": ResolvedPattern(name="outer", version="1.0.0"),
        "@scope/tool@^3.0.0": ResolvedPattern(name="@scope/tool", version="3.1.0"),
    }
    return FakeResolver(manifests, patterns)


SAMPLE_SEEDS = ["left-pad@^1.0.0", "outer@^1.0.0", "@scope/tool@^3.0.0"]


@pytest.fixture()
def sample_seeds() -> list[str]:
    return list(SAMPLE_SEEDS)


@pytest.fixture()
async def package_map(sample_resolver: FakeResolver, sample_seeds: list[str]) -> PackageMap:
    return await build_package_map(sample_seeds, sample_resolver)


@pytest.fixture()
def make_manifest():
    """Factory for eligible-by-default package manifests."""
    return manifest


@pytest.fixture()
def make_resolver():
    """Factory for FakeResolver instances over ad-hoc graphs."""
    return FakeResolver
