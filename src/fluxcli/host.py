"""Host system utilities for fluxcli.

This module maps the running platform onto one of the flux binaries
packaged with the application and resolves its path on disk.
"""

import os
import platform
import sys
from enum import Enum
from pathlib import Path

from icecream import ic

from fluxcli.exceptions import BinaryNotFoundError, UnsupportedPlatformError
from fluxcli.models import Architecture, OsFamily, PlatformKey

# Environment variable overriding the directory holding the flux binaries
BIN_DIR_ENV = "FLUX_CLI_BIN_DIR"

BINARY_TABLE: dict[PlatformKey, str] = {
    PlatformKey(OsFamily.UNIX, Architecture.X64, "osx-x64"): "flux-osx-x64",
    PlatformKey(OsFamily.UNIX, Architecture.ARM64, "osx-arm64"): "flux-osx-arm64",
    PlatformKey(OsFamily.UNIX, Architecture.X64, "linux-x64"): "flux-linux-x64",
    PlatformKey(OsFamily.UNIX, Architecture.ARM64, "linux-arm64"): "flux-linux-arm64",
    PlatformKey(OsFamily.WINDOWS, Architecture.X64, "win-x64"): "flux-win-x64.exe",
    PlatformKey(OsFamily.WINDOWS, Architecture.ARM64, "win-arm64"): "flux-win-arm64.exe",
}


def _text(value: str | Enum) -> str:
    return value.value if isinstance(value, Enum) else value


def default_install_dir() -> Path:
    """Return the directory the flux binaries are installed in.

    Uses ``FLUX_CLI_BIN_DIR`` when set, otherwise the ``bin`` directory
    shipped inside the package.

    Returns:
        The installation directory.

    """
    override = os.environ.get(BIN_DIR_ENV)
    return Path(override) if override else Path(__file__).resolve().parent / "bin"


def detect_os_family() -> OsFamily:
    """Detect the operating system family of the host."""
    match platform.system():
        case "Windows":
            return OsFamily.WINDOWS
        case _:
            return OsFamily.UNIX


def detect_architecture() -> Architecture:
    """Detect and return the CPU architecture.

    Returns:
        The CPU architecture.

    Raises:
        UnsupportedPlatformError: If the CPU architecture is not supported.

    """
    match platform.machine().lower():
        case "x86_64" | "amd64":
            return Architecture.X64
        case "arm64" | "aarch64":
            return Architecture.ARM64
        case _:
            raise UnsupportedPlatformError(f"Unsupported CPU architecture: {platform.machine()}")


def detect_runtime_identifier(architecture: str) -> str:
    """Build the runtime identifier (e.g. ``osx-arm64``) for the host.

    Args:
        architecture: The CPU architecture to suffix the identifier with.

    Returns:
        The runtime identifier string.

    """
    if sys.platform == "darwin":
        prefix = "osx"
    elif sys.platform.startswith("linux"):
        prefix = "linux"
    elif sys.platform in ("win32", "cygwin"):
        prefix = "win"
    else:
        prefix = sys.platform
    return f"{prefix}-{_text(architecture)}"


def binary_name(key: PlatformKey) -> str:
    """Look up the flux binary name for a platform triple.

    Args:
        key: The platform triple.

    Returns:
        The executable file name.

    Raises:
        UnsupportedPlatformError: If the triple has no packaged binary.

    """
    try:
        return BINARY_TABLE[key]
    except KeyError:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {_text(key.os_family)} {_text(key.architecture)} ({key.runtime_identifier})",
            platform_key=key,
        ) from None


def resolve_binary(
    os_family: str | None = None,
    architecture: str | None = None,
    runtime_identifier: str | None = None,
    install_dir: str | Path | None = None,
) -> str:
    """Resolve the absolute path of the flux binary for a platform.

    Any argument left as None is detected from the running host, which
    lets tests inject arbitrary platform triples.

    Args:
        os_family: Operating system family (``unix`` or ``windows``).
        architecture: CPU architecture (``x64`` or ``arm64``).
        runtime_identifier: Runtime identifier such as ``linux-x64``.
        install_dir: Directory holding the packaged binaries.

    Returns:
        Absolute path to the flux executable.

    Raises:
        UnsupportedPlatformError: If the platform triple is not supported.
        BinaryNotFoundError: If the binary is missing from install_dir.

    """
    if os_family is None:
        os_family = detect_os_family()
    if architecture is None:
        architecture = detect_architecture()
    if runtime_identifier is None:
        runtime_identifier = detect_runtime_identifier(architecture)

    name = binary_name(PlatformKey(os_family, architecture, runtime_identifier))
    base = Path(install_dir) if install_dir is not None else default_install_dir()
    binary_path = (base / name).absolute()
    ic(binary_path)

    if not binary_path.is_file():
        raise BinaryNotFoundError(str(binary_path))
    return str(binary_path)


class Host:
    """Detected platform of the running host.

    Attributes:
        os_family: Detected operating system family.
        architecture: Detected CPU architecture.
        runtime_identifier: Detected runtime identifier.
        bin_location: Directory holding the packaged flux binaries.

    """

    def __init__(self, install_dir: str | Path | None = None) -> None:
        """Initialize Host with platform detection.

        Args:
            install_dir: Directory holding the flux binaries. Defaults to
                         ``default_install_dir()``.

        """
        self.bin_location: Path = Path(install_dir) if install_dir is not None else default_install_dir()
        self.os_family: OsFamily = detect_os_family()
        self.architecture: Architecture = detect_architecture()
        self.runtime_identifier: str = detect_runtime_identifier(self.architecture)

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return (
            f"Host(os_family={self.os_family.value!r}, architecture={self.architecture.value!r}, "
            f"runtime_identifier={self.runtime_identifier!r}, bin_location={self.bin_location!r})"
        )

    @property
    def platform_key(self) -> PlatformKey:
        """Return the platform triple of this host."""
        return PlatformKey(self.os_family, self.architecture, self.runtime_identifier)

    def get_binary_path(self) -> str:
        """Resolve the flux binary for this host.

        Returns:
            Absolute path to the flux executable.

        """
        return resolve_binary(
            os_family=self.os_family,
            architecture=self.architecture,
            runtime_identifier=self.runtime_identifier,
            install_dir=self.bin_location,
        )
