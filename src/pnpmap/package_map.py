"""The constructed-once package map handed to the resolution layer."""

from __future__ import annotations

from collections.abc import Mapping

from pnpmap.lookup import PackageLocatorFinder
from pnpmap.models.records import PackageInformation, PackageLocator
from pnpmap.models.snapshot import MapSnapshot, SnapshotPackage
from pnpmap.store import LocatorIndex, PackageInformationStores


class PackageMap:
    """Frozen record store, its reverse index and the owner finder.

    Instances are immutable once constructed and safe to share between any
    number of concurrent readers.
    """

    def __init__(self, stores: PackageInformationStores, *, strict: bool = True) -> None:
        stores.freeze()
        self._stores = stores
        self._index = LocatorIndex.from_stores(stores, strict=strict)
        self._finder = PackageLocatorFinder(self._index)

    @property
    def stores(self) -> PackageInformationStores:
        return self._stores

    @property
    def index(self) -> LocatorIndex:
        return self._index

    def find_package_locator(self, path: str) -> PackageLocator | None:
        return self._finder.find(path)

    def get_package_location(self, locator: PackageLocator) -> str | None:
        information = self._stores.get(locator.name, locator.reference)
        if information is None:
            return None
        return information.location

    def get_package_dependencies(self, locator: PackageLocator) -> Mapping[str, str] | None:
        information = self._stores.get(locator.name, locator.reference)
        if information is None:
            return None
        return information.dependencies

    # ------------------------------------------------------------------
    # Snapshot conversion
    # ------------------------------------------------------------------

    def to_snapshot(self) -> MapSnapshot:
        return MapSnapshot(
            packages=[
                SnapshotPackage(
                    name=locator.name,
                    reference=locator.reference,
                    location=information.location,
                    dependencies=list(information.dependencies.items()),
                )
                for locator, information in self._stores.items()
            ]
        )

    @classmethod
    def from_snapshot(cls, snapshot: MapSnapshot, *, strict: bool = True) -> PackageMap:
        stores = PackageInformationStores()
        for package in snapshot.packages:
            stores.put(
                PackageLocator(package.name, package.reference),
                PackageInformation(
                    location=package.location,
                    dependencies=dict(package.dependencies),
                ),
            )
        return cls(stores, strict=strict)
