"""Vendor scoped prefix bindings with most-specific-first ordering."""

import logging
from collections.abc import Iterator

from autoloader.normalize_directory import normalize_directory
from autoloader.normalize_namespace import NAMESPACE_SEPARATOR, normalize_namespace
from autoloader.path_table import DirectorySpec, as_directory_list

logger = logging.getLogger(__name__)


class VendorBindings:
    """Groups prefix bindings by vendor, the first segment of a namespace.

    For the vendor ``Acme`` the bindings ``Acme\\Util\\`` and ``Acme\\`` may
    both exist. They are searched longest prefix first so that a binding for
    a sub-namespace overrides the binding for the whole vendor.
    """

    def __init__(self) -> None:
        """Initialize an empty set of bindings."""
        self._vendors: dict[str, dict[str, list[str]]] = {}

    def add(self, namespace: str, directories: DirectorySpec) -> "VendorBindings":
        """Bind directories to a vendor namespace or one of its sub-namespaces."""
        key = normalize_namespace(namespace, strip=NAMESPACE_SEPARATOR + "_")
        if not key:
            msg = "Vendor bindings require a non-empty namespace"
            raise ValueError(msg)

        vendor = key.split(NAMESPACE_SEPARATOR, 1)[0]
        subs = self._vendors.setdefault(vendor, {})
        new = [normalize_directory(d) for d in as_directory_list(directories)]

        if key in subs:
            subs[key].extend(new)
        else:
            subs[key] = new
            # Stable sort keeps insertion order among equally specific keys.
            self._vendors[vendor] = dict(
                sorted(subs.items(), key=lambda kv: len(kv[0]), reverse=True)
            )
            logger.debug("Resorted bindings for vendor '%s'", vendor)

        return self

    def vendors(self) -> list[str]:
        return list(self._vendors)

    def bindings_for(self, vendor: str) -> Iterator[tuple[str, list[str]]]:
        """Yield ``(namespace, directories)`` for a vendor, most specific first."""
        for key, dirs in self._vendors.get(vendor, {}).items():
            yield key, list(dirs)

    def as_dict(self) -> dict[str, dict[str, list[str]]]:
        return {
            vendor: {key: list(dirs) for key, dirs in subs.items()}
            for vendor, subs in self._vendors.items()
        }

    def __contains__(self, vendor: object) -> bool:
        return vendor in self._vendors

    def __len__(self) -> int:
        return len(self._vendors)
