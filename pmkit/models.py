from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple


CommandLine = List[str]

MANIFEST_FILE = "package.json"
NODE_MODULES_DIR = "node_modules"


class PackageManagerKind(str, Enum):
    """Enumeration of supported JavaScript package managers."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    NONE = "none"

    @property
    def binary(self) -> Optional[str]:
        """Executable name, or None for NONE."""
        if self is PackageManagerKind.NONE:
            return None
        return self.value

    @property
    def lockfile(self) -> Optional[str]:
        return LOCKFILES.get(self)


# Detection precedence: first match wins.
LOCKFILES: Dict[PackageManagerKind, str] = {
    PackageManagerKind.BUN: "bun.lockb",
    PackageManagerKind.PNPM: "pnpm-lock.yaml",
    PackageManagerKind.YARN: "yarn.lock",
    PackageManagerKind.NPM: "package-lock.json",
}

MARKER_FILES: Tuple[str, ...] = tuple(LOCKFILES.values()) + (MANIFEST_FILE,)


class ActionKind(str, Enum):
    """Abstract operations a caller can request."""
    INSTALL = "install"
    RUN = "run"
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    CLEAN = "clean"


@dataclass(frozen=True)
class Action:
    """An abstract action, resolved into a command line per package manager."""
    kind: ActionKind
    script: Optional[str] = None
    packages: Tuple[str, ...] = ()
    dev: bool = False
    is_global: bool = False
    extra_args: Tuple[str, ...] = ()

    @classmethod
    def install(cls, *args: str) -> "Action":
        return cls(ActionKind.INSTALL, extra_args=tuple(args))

    @classmethod
    def run(cls, script: str, *args: str) -> "Action":
        return cls(ActionKind.RUN, script=script, extra_args=tuple(args))

    @classmethod
    def add(cls, *packages: str, dev: bool = False, is_global: bool = False) -> "Action":
        return cls(ActionKind.ADD, packages=tuple(packages), dev=dev, is_global=is_global)

    @classmethod
    def remove(cls, *packages: str) -> "Action":
        return cls(ActionKind.REMOVE, packages=tuple(packages))

    @classmethod
    def update(cls, *args: str) -> "Action":
        return cls(ActionKind.UPDATE, extra_args=tuple(args))

    @classmethod
    def clean(cls) -> "Action":
        return cls(ActionKind.CLEAN)


@dataclass(frozen=True)
class ProjectContext:
    """Snapshot of the marker files present in a project directory."""
    path: Path
    markers: FrozenSet[str] = frozenset()

    @classmethod
    def scan(cls, path="."):
        """Read marker files from disk. Only the directory itself is inspected."""
        root = Path(path)
        present = frozenset(name for name in MARKER_FILES if (root / name).is_file())
        return cls(path=root, markers=present)

    def has(self, name: str) -> bool:
        return name in self.markers

    @property
    def has_manifest(self) -> bool:
        return MANIFEST_FILE in self.markers


@dataclass
class ProjectInfo:
    """Summary of a project as shown by `pm info`."""
    kind: PackageManagerKind
    directory: str
    name: Optional[str] = None
    version: Optional[str] = None
    scripts: Dict[str, str] = field(default_factory=dict)
    lockfiles: List[str] = field(default_factory=list)

    @property
    def label(self) -> Optional[str]:
        if not self.name:
            return None
        return f"{self.name}@{self.version}" if self.version else self.name


@dataclass
class CleanPlan:
    """Ordered steps of a clean: removals, cache clears, then reinstall."""
    remove_paths: List[Path] = field(default_factory=list)
    cache_commands: List[CommandLine] = field(default_factory=list)
    install_command: Optional[CommandLine] = None
