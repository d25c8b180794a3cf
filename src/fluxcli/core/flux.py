"""Flux facade class.

This module provides the Flux class which serves as the main entry point
for running flux sub-commands, together with the pure argument builders
it uses for each operation.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from urllib.parse import urlparse

from icecream import ic

from fluxcli.exceptions import InvalidArgumentError, OperationFailedError
from fluxcli.host import resolve_binary
from fluxcli.models import (
    DEFAULT_KUSTOMIZATION_INTERVAL,
    DEFAULT_NAMESPACE,
    DEFAULT_OCI_TAG,
    DEFAULT_SOURCE_INTERVAL,
    FluxResource,
    InstallOptions,
    KustomizationOptions,
    OciSourceOptions,
    OperationResult,
    ReconcileOptions,
)
from fluxcli.process import run_process

Runner = Callable[[str, Sequence[str], asyncio.Event | None], Awaitable[OperationResult]]


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _validate_url(url: object) -> str:
    """Validate an OCI source URL.

    Args:
        url: The URL supplied by the caller.

    Returns:
        The URL as a string.

    Raises:
        InvalidArgumentError: If the URL is missing or not an absolute URI.

    """
    if not isinstance(url, str) or not url:
        raise InvalidArgumentError("url", "a source URL is required")
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidArgumentError("url", f"'{url}' is not a valid URI ({e})") from e
    if not parsed.scheme or not parsed.netloc:
        raise InvalidArgumentError("url", f"'{url}' is not a valid URI")
    return url


def build_install_args(options: InstallOptions) -> list[str]:
    """Build the argument vector for ``flux install``.

    The ``--context`` flag is left out entirely when no context is given.
    """
    args = ["install"]
    if options.context:
        args.extend(["--context", options.context])
    return args


def build_oci_source_args(options: OciSourceOptions) -> list[str]:
    """Build the argument vector for ``flux create source oci``.

    Args:
        options: The OCI source options.

    Returns:
        List of arguments for the flux binary.

    Raises:
        InvalidArgumentError: If the name is empty or the URL is malformed.

    """
    if not options.name:
        raise InvalidArgumentError("name", "a source name is required")
    url = _validate_url(options.url)
    return [
        "create",
        "source",
        "oci",
        options.name,
        "--url",
        url,
        "--tag",
        options.tag,
        "--interval",
        options.interval,
        "--namespace",
        options.namespace,
    ]


def build_kustomization_args(options: KustomizationOptions) -> list[str]:
    """Build the argument vector for ``flux create kustomization``.

    ``--depends-on`` is always emitted; it carries an empty string when
    the Kustomization has no dependencies.

    Args:
        options: The Kustomization options.

    Returns:
        List of arguments for the flux binary.

    """
    depends_on = ",".join(options.depends_on) if options.depends_on is not None else ""
    return [
        "create",
        "kustomization",
        options.name,
        "--source",
        options.source,
        "--path",
        options.path,
        "--namespace",
        options.namespace,
        "--target-namespace",
        options.namespace,
        "--interval",
        options.interval,
        "--prune",
        _format_bool(options.prune),
        "--wait",
        _format_bool(options.wait),
        "--depends-on",
        depends_on,
    ]


def build_reconcile_args(options: ReconcileOptions) -> list[str]:
    """Build the argument vector for ``flux reconcile``."""
    return ["reconcile", options.resource.keyword, options.name, "--namespace", options.namespace]


class Flux:
    """Wrapper for flux binary operations.

    The binary path is resolved the first time an operation needs it and
    kept on the instance, so a long-lived Flux handle resolves only once.

    Attributes:
        runner: Coroutine function used to execute the flux binary.

    """

    def __init__(self, binary: str | None = None, runner: Runner = run_process) -> None:
        """Initialize Flux.

        Args:
            binary: Path to the flux executable. Resolved for the host
                    platform on first use when omitted.
            runner: Coroutine function running (binary, args, cancel_event)
                    and returning an OperationResult.

        """
        self._binary: str | None = binary
        self.runner: Runner = runner

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Flux(binary={self._binary!r})"

    @property
    def binary(self) -> str:
        """Return the flux binary path, resolving it on first access."""
        if self._binary is None:
            self._binary = resolve_binary()
        return self._binary

    async def _run(
        self,
        operation: str,
        description: str,
        args: list[str],
        cancel_event: asyncio.Event | None,
    ) -> None:
        """Run flux with the given arguments and check the exit code.

        Args:
            operation: Short operation name stored on failures.
            description: Human readable action used in the failure message.
            args: Argument vector for the flux binary.
            cancel_event: Optional event cancelling the running process.

        Raises:
            OperationFailedError: If flux exits with a non-zero code.
            OperationCancelledError: If cancel_event is set while flux runs.

        """
        ic(operation, args)
        exit_code, output = await self.runner(self.binary, args, cancel_event)
        if exit_code != 0:
            raise OperationFailedError(operation, description, exit_code, output)

    async def install(self, context: str | None = None, *, cancel_event: asyncio.Event | None = None) -> None:
        """Install flux in the given kubeconfig context.

        Args:
            context: Kubeconfig context to install into. Uses the current
                     context when empty or omitted.
            cancel_event: Optional event cancelling the running process.

        Raises:
            OperationFailedError: If flux exits with a non-zero code.
            OperationCancelledError: If cancel_event is set while flux runs.

        """
        args = build_install_args(InstallOptions(context=context))
        await self._run("install", "install flux", args, cancel_event)

    async def create_oci_source(
        self,
        name: str,
        url: str,
        namespace: str = DEFAULT_NAMESPACE,
        tag: str = DEFAULT_OCI_TAG,
        interval: str = DEFAULT_SOURCE_INTERVAL,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Create an OCIRepository source.

        Args:
            name: Name of the source.
            url: OCI artifact URL.
            namespace: Namespace the source is created in.
            tag: Artifact tag to track.
            interval: Source reconciliation interval.
            cancel_event: Optional event cancelling the running process.

        Raises:
            InvalidArgumentError: If the name or URL is invalid.
            OperationFailedError: If flux exits with a non-zero code.
            OperationCancelledError: If cancel_event is set while flux runs.

        """
        args = build_oci_source_args(
            OciSourceOptions(name=name, url=url, namespace=namespace, tag=tag, interval=interval)
        )
        await self._run("create-source", f"create OCI source {name}", args, cancel_event)

    async def create_kustomization(
        self,
        name: str,
        source: str,
        path: str,
        namespace: str = DEFAULT_NAMESPACE,
        interval: str = DEFAULT_KUSTOMIZATION_INTERVAL,
        depends_on: Iterable[str] | None = None,
        prune: bool = True,
        wait: bool = True,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Create a Kustomization.

        Args:
            name: Name of the Kustomization.
            source: Source reference, e.g. ``OCIRepository/podinfo``.
            path: Path inside the source; an empty string means the root.
            namespace: Namespace of the Kustomization and its target namespace.
            interval: Reconciliation interval.
            depends_on: Names of Kustomizations this one depends on.
            prune: Whether flux prunes removed resources.
            wait: Whether flux waits for resources to become ready.
            cancel_event: Optional event cancelling the running process.

        Raises:
            InvalidArgumentError: If depends_on is a bare string.
            OperationFailedError: If flux exits with a non-zero code.
            OperationCancelledError: If cancel_event is set while flux runs.

        """
        if isinstance(depends_on, str):
            raise InvalidArgumentError("depends_on", f"expected a list of names, got the string {depends_on!r}")
        options = KustomizationOptions(
            name=name,
            source=source,
            path=path,
            namespace=namespace,
            interval=interval,
            depends_on=tuple(depends_on) if depends_on is not None else None,
            prune=prune,
            wait=wait,
        )
        args = build_kustomization_args(options)
        await self._run("create-kustomization", f"create Kustomization {name}", args, cancel_event)

    async def reconcile(
        self,
        resource: FluxResource | str,
        name: str,
        namespace: str = DEFAULT_NAMESPACE,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """Reconcile a source or Kustomization.

        Args:
            resource: Kind of resource to reconcile.
            name: Name of the resource.
            namespace: Namespace of the resource.
            cancel_event: Optional event cancelling the running process.

        Raises:
            InvalidArgumentError: If resource is not a known kind.
            OperationFailedError: If flux exits with a non-zero code.
            OperationCancelledError: If cancel_event is set while flux runs.

        """
        if not isinstance(resource, FluxResource):
            try:
                resource = FluxResource.parse(resource)
            except ValueError as e:
                raise InvalidArgumentError("resource", str(e)) from None
        args = build_reconcile_args(ReconcileOptions(resource=resource, name=name, namespace=namespace))
        await self._run("reconcile", f"reconcile {resource.value} {name}", args, cancel_event)
