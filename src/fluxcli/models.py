"""Data models for fluxcli.

This module provides the platform types used for binary resolution and
one options structure per flux operation, each enumerating every flag
together with its default.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

DEFAULT_NAMESPACE = "flux-system"
DEFAULT_OCI_TAG = "latest"
DEFAULT_SOURCE_INTERVAL = "10m"
DEFAULT_KUSTOMIZATION_INTERVAL = "5m"


class OsFamily(str, Enum):
    """Operating system families with a packaged flux binary."""

    UNIX = "unix"
    WINDOWS = "windows"


class Architecture(str, Enum):
    """CPU architectures with a packaged flux binary."""

    X64 = "x64"
    ARM64 = "arm64"


class FluxResource(Enum):
    """Resource kinds accepted by ``flux reconcile``."""

    SOURCE = "Source"
    KUSTOMIZATION = "Kustomization"

    @property
    def keyword(self) -> str:
        """Return the sub-command keyword flux expects for this kind."""
        return _RESOURCE_KEYWORDS[self]

    @classmethod
    def parse(cls, text: str) -> "FluxResource":
        """Return the kind named by its value (``Source``) or keyword (``source``).

        Raises:
            ValueError: If text names no resource kind.

        """
        for resource, keyword in _RESOURCE_KEYWORDS.items():
            if text in (resource.value, keyword):
                return resource
        raise ValueError(f"unknown resource kind {text!r}")


_RESOURCE_KEYWORDS = {
    FluxResource.SOURCE: "source",
    FluxResource.KUSTOMIZATION: "kustomization",
}


class PlatformKey(NamedTuple):
    """Platform triple used to look up the packaged flux binary.

    Attributes:
        os_family: Operating system family.
        architecture: CPU architecture of the running process.
        runtime_identifier: Runtime identifier such as ``linux-x64``.

    """

    os_family: str
    architecture: str
    runtime_identifier: str


class OperationResult(NamedTuple):
    """Outcome of a single flux process run.

    Attributes:
        exit_code: Process exit code.
        output: Combined stdout and stderr text.

    """

    exit_code: int
    output: str


@dataclass(frozen=True, slots=True)
class InstallOptions:
    """Options for ``flux install``."""

    context: str | None = None


@dataclass(frozen=True, slots=True)
class OciSourceOptions:
    """Options for ``flux create source oci``.

    Attributes:
        name: Name of the OCIRepository.
        url: OCI artifact URL, e.g. ``oci://ghcr.io/org/manifests``.
        namespace: Namespace the source is created in.
        tag: Artifact tag to track.
        interval: Source reconciliation interval.

    """

    name: str
    url: str
    namespace: str = DEFAULT_NAMESPACE
    tag: str = DEFAULT_OCI_TAG
    interval: str = DEFAULT_SOURCE_INTERVAL


@dataclass(frozen=True, slots=True)
class KustomizationOptions:
    """Options for ``flux create kustomization``.

    Attributes:
        name: Name of the Kustomization.
        source: Source reference, e.g. ``OCIRepository/podinfo``.
        path: Path inside the source; empty string means the root.
        namespace: Namespace of the Kustomization, also used as target namespace.
        interval: Reconciliation interval.
        depends_on: Names of Kustomizations this one depends on.
        prune: Whether flux garbage-collects removed resources.
        wait: Whether flux waits for applied resources to become ready.

    """

    name: str
    source: str
    path: str = ""
    namespace: str = DEFAULT_NAMESPACE
    interval: str = DEFAULT_KUSTOMIZATION_INTERVAL
    depends_on: tuple[str, ...] | None = None
    prune: bool = True
    wait: bool = True


@dataclass(frozen=True, slots=True)
class ReconcileOptions:
    """Options for ``flux reconcile``."""

    resource: FluxResource
    name: str
    namespace: str = DEFAULT_NAMESPACE
