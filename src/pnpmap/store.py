"""Package information stores and the location → locator reverse index.

Both structures are populated once by the map builder and are read-only
afterwards, so they can be shared between concurrent readers without locking.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import structlog

from pnpmap.errors import DuplicateLocationError
from pnpmap.models.records import PackageLocator

if TYPE_CHECKING:
    from pnpmap.models.records import PackageInformation

log = structlog.get_logger()


class PackageInformationStores:
    """Records keyed by package name, then by reference, in insertion order."""

    def __init__(self) -> None:
        self._stores: dict[str | None, dict[str | None, PackageInformation]] = {}
        self._frozen = False

    def put(self, locator: PackageLocator, information: PackageInformation) -> None:
        if self._frozen:
            raise RuntimeError("package information stores are frozen")
        self._stores.setdefault(locator.name, {})[locator.reference] = information

    def get(self, name: str | None, reference: str | None) -> PackageInformation | None:
        store = self._stores.get(name)
        if store is None:
            return None
        return store.get(reference)

    def items(self) -> Iterator[tuple[PackageLocator, PackageInformation]]:
        for name, store in self._stores.items():
            for reference, information in store.items():
                yield PackageLocator(name, reference), information

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, locator: object) -> bool:
        if not isinstance(locator, PackageLocator):
            return False
        return self.get(locator.name, locator.reference) is not None

    def __len__(self) -> int:
        return sum(len(store) for store in self._stores.values())


class LocatorIndex:
    """Reverse index: install location → owning package locator."""

    def __init__(self) -> None:
        self._by_location: dict[str, PackageLocator] = {}

    @classmethod
    def from_stores(cls, stores: PackageInformationStores, *, strict: bool = True) -> LocatorIndex:
        index = cls()
        for locator, information in stores.items():
            if information.location is not None:
                index.add(information.location, locator, strict=strict)
        return index

    def add(self, location: str, locator: PackageLocator, *, strict: bool = True) -> None:
        existing = self._by_location.get(location)
        if existing is not None and existing != locator:
            if strict:
                raise DuplicateLocationError(location, existing, locator)
            # Last writer wins
            log.warning(
                "duplicate_package_location",
                location=location,
                existing=str(existing),
                replacement=str(locator),
            )
        self._by_location[location] = locator

    def get(self, location: str) -> PackageLocator | None:
        return self._by_location.get(location)

    def locations(self) -> list[str]:
        return list(self._by_location)

    def __len__(self) -> int:
        return len(self._by_location)
