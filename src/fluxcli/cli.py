#!/usr/bin/env python
"""Command-line interface for fluxcli.

This module provides the CLI entry point, exposing the install,
create-source, create-kustomization and reconcile operations of the
Flux facade from a shell.
"""

import asyncio
import sys
from collections.abc import Coroutine
from typing import Any

import click
from icecream import ic
from rich.markup import escape

from fluxcli import __version__, console
from fluxcli.core.flux import Flux
from fluxcli.exceptions import FluxError
from fluxcli.models import (
    DEFAULT_KUSTOMIZATION_INTERVAL,
    DEFAULT_NAMESPACE,
    DEFAULT_OCI_TAG,
    DEFAULT_SOURCE_INTERVAL,
    FluxResource,
)


def run_operation(operation: Coroutine[Any, Any, None], status: str, done: str) -> None:
    """Run a flux operation to completion and report the outcome.

    Args:
        operation: The coroutine performing the flux call.
        status: Message shown next to the spinner while it runs.
        done: Message printed once it succeeds.

    """
    try:
        with console.spinner(status):
            asyncio.run(operation)
    except FluxError as e:
        console.error(escape(str(e)))
        sys.exit(1)
    console.success(done)


@click.group(invoke_without_command=True, help="Run flux GitOps operations")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--binary", required=False, help="path to the flux binary (resolved for this platform by default)")
@click.pass_context
def cli(ctx: click.Context, version: bool, debug: bool, binary: str | None) -> None:
    """Process global options and prepare the Flux handle.

    Args:
        ctx: Click context carrying the Flux handle to sub-commands.
        version: Print version and exit.
        debug: Enable debug output.
        binary: Explicit path to the flux binary.

    """
    if not debug:
        ic.disable()
    else:
        ic.enable()

    if version:
        click.echo(__version__)
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    ctx.obj = Flux(binary=binary)


@cli.command(help="Install flux into a cluster")
@click.option("--context", required=False, help="kubeconfig context to install into")
@click.pass_obj
def install(flux: Flux, context: str | None) -> None:
    """Install flux."""
    target = escape(context) if context else "current context"
    run_operation(flux.install(context), f"Installing flux into {target}", "Flux installed")


@cli.command("create-source", help="Create an OCIRepository source")
@click.argument("name")
@click.option("--url", required=True, help="OCI artifact URL, e.g. oci://ghcr.io/org/manifests")
@click.option("--namespace", "-n", default=DEFAULT_NAMESPACE, show_default=True, help="namespace of the source")
@click.option("--tag", default=DEFAULT_OCI_TAG, show_default=True, help="artifact tag to track")
@click.option("--interval", default=DEFAULT_SOURCE_INTERVAL, show_default=True, help="reconciliation interval")
@click.pass_obj
def create_source(flux: Flux, name: str, url: str, namespace: str, tag: str, interval: str) -> None:
    """Create an OCIRepository source."""
    run_operation(
        flux.create_oci_source(name, url, namespace=namespace, tag=tag, interval=interval),
        f"Creating OCI source {escape(name)}",
        f"OCI source {console.highlight(escape(name))} created",
    )


@cli.command("create-kustomization", help="Create a Kustomization")
@click.argument("name")
@click.option("--source", required=True, help="source reference, e.g. OCIRepository/podinfo")
@click.option("--path", default="", help="path inside the source (defaults to the root)")
@click.option("--namespace", "-n", default=DEFAULT_NAMESPACE, show_default=True, help="namespace of the Kustomization")
@click.option("--interval", default=DEFAULT_KUSTOMIZATION_INTERVAL, show_default=True, help="reconciliation interval")
@click.option("--depends-on", multiple=True, help="Kustomization this one depends on (repeatable)")
@click.option("--prune/--no-prune", default=True, show_default=True, help="garbage collect removed resources")
@click.option("--wait/--no-wait", default=True, show_default=True, help="wait for resources to become ready")
@click.pass_obj
def create_kustomization(
    flux: Flux,
    name: str,
    source: str,
    path: str,
    namespace: str,
    interval: str,
    depends_on: tuple[str, ...],
    prune: bool,
    wait: bool,
) -> None:
    """Create a Kustomization."""
    run_operation(
        flux.create_kustomization(
            name,
            source,
            path,
            namespace=namespace,
            interval=interval,
            depends_on=depends_on or None,
            prune=prune,
            wait=wait,
        ),
        f"Creating Kustomization {escape(name)}",
        f"Kustomization {console.highlight(escape(name))} created",
    )


@cli.command(help="Reconcile a source or Kustomization")
@click.argument("kind", type=click.Choice([resource.keyword for resource in FluxResource], case_sensitive=False))
@click.argument("name")
@click.option("--namespace", "-n", default=DEFAULT_NAMESPACE, show_default=True, help="namespace of the resource")
@click.pass_obj
def reconcile(flux: Flux, kind: str, name: str, namespace: str) -> None:
    """Reconcile a resource."""
    resource = FluxResource.parse(kind)
    run_operation(
        flux.reconcile(resource, name, namespace=namespace),
        f"Reconciling {resource.keyword} {escape(name)}",
        f"{resource.value} {console.highlight(escape(name))} reconciled",
    )


if __name__ == "__main__":
    cli()
