"""fluxcli: Async wrapper for the flux GitOps binary.

This package resolves the flux executable packaged for the current
platform and runs its install, create and reconcile sub-commands.

Example usage:
    from fluxcli import Flux, FluxResource

    flux = Flux()
    await flux.install()
    await flux.create_oci_source("podinfo", "oci://ghcr.io/stefanprodan/manifests/podinfo")
    await flux.create_kustomization("podinfo", "OCIRepository/podinfo", "")
    await flux.reconcile(FluxResource.KUSTOMIZATION, "podinfo")
"""

__version__ = "0.1.0"

from fluxcli.cli import cli
from fluxcli.core.flux import Flux
from fluxcli.exceptions import (
    BinaryNotFoundError,
    FluxError,
    InvalidArgumentError,
    OperationCancelledError,
    OperationFailedError,
    UnsupportedPlatformError,
)
from fluxcli.host import Host, resolve_binary
from fluxcli.models import FluxResource, OperationResult, PlatformKey

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Classes
    "Flux",
    "Host",
    "resolve_binary",
    # Models
    "FluxResource",
    "OperationResult",
    "PlatformKey",
    # Exceptions
    "FluxError",
    "BinaryNotFoundError",
    "InvalidArgumentError",
    "OperationCancelledError",
    "OperationFailedError",
    "UnsupportedPlatformError",
]
