"""Core infrastructure subpackage.

This package contains the main Flux facade class along with the
argument builders for each flux operation.
"""

from fluxcli.core.flux import (
    Flux,
    build_install_args,
    build_kustomization_args,
    build_oci_source_args,
    build_reconcile_args,
)

__all__ = [
    "Flux",
    "build_install_args",
    "build_kustomization_args",
    "build_oci_source_args",
    "build_reconcile_args",
]
