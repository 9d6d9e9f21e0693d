# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Known Go ports and requested variant enumeration."""

import logging

from docgen.declaration import PlatformVariant

logger = logging.getLogger(__name__)

KNOWN_PORTS: dict[str, tuple[str, ...]] = {
    "aix": ("ppc64",),
    "android": ("386", "amd64", "arm", "arm64"),
    "darwin": ("amd64", "arm64"),
    "dragonfly": ("amd64",),
    "freebsd": ("386", "amd64", "arm", "arm64", "riscv64"),
    "illumos": ("amd64",),
    "ios": ("amd64", "arm64"),
    "js": ("wasm",),
    "linux": (
        "386",
        "amd64",
        "arm",
        "arm64",
        "loong64",
        "mips",
        "mips64",
        "mips64le",
        "mipsle",
        "ppc64",
        "ppc64le",
        "riscv64",
        "s390x",
    ),
    "netbsd": ("386", "amd64", "arm", "arm64"),
    "openbsd": ("386", "amd64", "arm", "arm64", "ppc64", "riscv64"),
    "plan9": ("386", "amd64", "arm"),
    "solaris": ("amd64",),
    "wasip1": ("wasm",),
    "windows": ("386", "amd64", "arm", "arm64"),
}

# File name suffixes recognized by the go tool, a superset of the ports above.
KNOWN_OS: frozenset[str] = frozenset(KNOWN_PORTS) | {
    "hurd",
    "nacl",
    "zos",
}
KNOWN_ARCH: frozenset[str] = frozenset(
    arch for arches in KNOWN_PORTS.values() for arch in arches
) | {
    "amd64p32",
    "arm64be",
    "armbe",
    "loong64",
    "mips64p32",
    "mips64p32le",
    "ppc",
    "riscv",
    "s390",
    "sparc",
    "sparc64",
}
UNIX_OS: frozenset[str] = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "linux",
        "netbsd",
        "openbsd",
        "solaris",
    }
)

# Ports whose native toolchain enables cgo by default.
CGO_PORTS: frozenset[tuple[str, str]] = frozenset(
    {
        ("aix", "ppc64"),
        *(("android", arch) for arch in KNOWN_PORTS["android"]),
        ("darwin", "amd64"),
        ("darwin", "arm64"),
        ("dragonfly", "amd64"),
        *(("freebsd", arch) for arch in KNOWN_PORTS["freebsd"]),
        ("illumos", "amd64"),
        *(("ios", arch) for arch in KNOWN_PORTS["ios"]),
        *(("linux", arch) for arch in KNOWN_PORTS["linux"] if arch != "ppc64"),
        *(("netbsd", arch) for arch in KNOWN_PORTS["netbsd"]),
        *(("openbsd", arch) for arch in ("386", "amd64", "arm", "arm64")),
        ("solaris", "amd64"),
        ("windows", "386"),
        ("windows", "amd64"),
        ("windows", "arm64"),
    }
)

DEFAULT_OS = "linux"
DEFAULT_ARCH = "amd64"


def build_context(variant: PlatformVariant) -> tuple[str, str]:
    """Return the concrete GOOS/GOARCH used to evaluate ``variant``.

    Missing qualifiers fall back to ``linux``/``amd64``; an OS without an
    amd64 port uses its first listed architecture.
    """
    goos = variant.os or DEFAULT_OS
    if variant.arch is not None:
        return goos, variant.arch
    arches = KNOWN_PORTS.get(goos, (DEFAULT_ARCH,))
    goarch = DEFAULT_ARCH if DEFAULT_ARCH in arches else arches[0]
    return goos, goarch


def requested_variants(
    os_name: str | None = None, arch: str | None = None
) -> list[PlatformVariant]:
    """Enumerate the variants to resolve for the given CLI restrictions.

    Args:
        os_name: Restrict to one operating system.
        arch: Restrict to one architecture.

    Returns:
        Requested variants ordered from broadest to most specific.

    Raises:
        ValueError: If ``os_name`` or ``arch`` is not a known value.
    """
    if os_name is not None and os_name not in KNOWN_OS:
        raise ValueError(f"Unknown operating system: {os_name}")
    if arch is not None and arch not in KNOWN_ARCH:
        raise ValueError(f"Unknown architecture: {arch}")

    if os_name is not None and arch is not None:
        if arch not in KNOWN_PORTS.get(os_name, ()):
            logger.warning(f"Requested port is not first-class (os={os_name} arch={arch})")
        variants = [PlatformVariant(os=os_name, arch=arch)]
    elif os_name is not None:
        variants = [PlatformVariant(os=os_name)]
        variants.extend(
            PlatformVariant(os=os_name, arch=port_arch)
            for port_arch in KNOWN_PORTS.get(os_name, ())
        )
    elif arch is not None:
        variants = [
            PlatformVariant(os=port_os, arch=arch)
            for port_os, arches in KNOWN_PORTS.items()
            if arch in arches
        ]
        if not variants:
            raise ValueError(f"No known port uses architecture: {arch}")
    else:
        variants = [PlatformVariant()]
        variants.extend(PlatformVariant(os=port_os) for port_os in KNOWN_PORTS)
        variants.extend(
            PlatformVariant(os=port_os, arch=port_arch)
            for port_os, arches in KNOWN_PORTS.items()
            for port_arch in arches
        )
    return sorted(variants, key=PlatformVariant.sort_key)
