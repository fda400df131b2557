"""Kernel architecture table: aliases, cross-compile prefixes, Debian cross GCC packages.

Every architecture name maps to one ArchKind. Names outside the table map to
ArchKind.UNKNOWN and keep their literal spelling, so the kernel build sees
exactly what the user typed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ArchKind(enum.Enum):
    X86_64 = "x86_64"
    ARM64 = "arm64"
    ARM = "arm"
    RISCV = "riscv"
    UNKNOWN = "unknown"


# Known toolchain buckets only; UNKNOWN has no prefix (native compilation).
CROSS_PREFIXES: dict[ArchKind, str] = {
    ArchKind.X86_64: "x86_64-linux-gnu-",
    ArchKind.ARM64: "aarch64-linux-gnu-",
    ArchKind.ARM: "arm-linux-gnueabihf-",
    ArchKind.RISCV: "riscv64-linux-gnu-",
}

# Debian/Ubuntu package providing each cross GCC.
GCC_PACKAGES: dict[ArchKind, str] = {
    ArchKind.X86_64: "gcc-x86-64-linux-gnu",
    ArchKind.ARM64: "gcc-aarch64-linux-gnu",
    ArchKind.ARM: "gcc-arm-linux-gnueabihf",
    ArchKind.RISCV: "gcc-riscv64-linux-gnu",
}

# alias -> (kind, value passed to the kernel as ARCH).
# x86, i386 and x86_64 are all valid kernel ARCH values and select different
# configs, so they are kept; aarch64 is not, so it becomes arm64.
ALIASES: dict[str, tuple[ArchKind, str]] = {
    "x86_64": (ArchKind.X86_64, "x86_64"),
    "x86": (ArchKind.X86_64, "x86"),
    "i386": (ArchKind.X86_64, "i386"),
    "arm64": (ArchKind.ARM64, "arm64"),
    "aarch64": (ArchKind.ARM64, "arm64"),
    "arm": (ArchKind.ARM, "arm"),
    "riscv": (ArchKind.RISCV, "riscv"),
}


@dataclass(frozen=True)
class Architecture:
    """A parsed architecture: its bucket and the ARCH value to hand to make."""

    kind: ArchKind
    name: str

    @property
    def is_known(self) -> bool:
        return self.kind is not ArchKind.UNKNOWN

    @property
    def cross_prefix(self) -> str:
        """Toolchain prefix for this bucket; empty for UNKNOWN."""
        if self.kind is ArchKind.UNKNOWN:
            return ""
        return CROSS_PREFIXES[self.kind]


def parse_architecture(name: str) -> Architecture:
    """Map a user-supplied architecture name to an Architecture (never raises)."""
    entry = ALIASES.get(name)
    if entry is None:
        return Architecture(ArchKind.UNKNOWN, name)
    kind, kernel_arch = entry
    return Architecture(kind, kernel_arch)


def known_kinds() -> list[ArchKind]:
    """Toolchain buckets in table order (UNKNOWN excluded)."""
    return [k for k in ArchKind if k is not ArchKind.UNKNOWN]
