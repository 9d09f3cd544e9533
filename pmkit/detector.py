"""
Package manager detector for pmkit.

Looks for lockfiles and the manifest in a single directory and decides which
package manager governs it. Nothing is cached: every call re-reads the
filesystem.
"""
import json
import logging
from pathlib import Path
from typing import List

from pmkit.models import (
    LOCKFILES,
    MANIFEST_FILE,
    PackageManagerKind,
    ProjectContext,
    ProjectInfo,
)
from pmkit.utils.exceptions import NoProjectFoundError

logger = logging.getLogger(__name__)


def detect_from_context(context: ProjectContext) -> PackageManagerKind:
    """Pick the package manager for an already scanned context."""
    for kind, lockfile in LOCKFILES.items():
        if context.has(lockfile):
            return kind

    # Default to npm if only package.json exists
    if context.has_manifest:
        return PackageManagerKind.NPM

    return PackageManagerKind.NONE


class PackageManagerDetector:
    """Detects the package manager used by a project directory."""

    def __init__(self, project_path: str = "."):
        """
        Initialize the detector.

        Args:
            project_path: Path to the project directory to inspect
        """
        self.project_path = Path(project_path)

    def scan(self) -> ProjectContext:
        """Read the marker files currently on disk."""
        return ProjectContext.scan(self.project_path)

    def detect(self) -> PackageManagerKind:
        """Return the package manager kind, or NONE when no marker is present."""
        context = self.scan()
        kind = detect_from_context(context)
        logger.debug(f"Detected {kind.value} in {self.project_path} (markers: {sorted(context.markers)})")
        return kind

    def get_lockfiles(self) -> List[Path]:
        """Lockfiles present in the project, in precedence order."""
        found_files = []
        for lockfile in LOCKFILES.values():
            file_path = self.project_path / lockfile
            if file_path.is_file():
                found_files.append(file_path)
        return found_files

    def project_info(self) -> ProjectInfo:
        """Detected kind plus name, version and scripts from package.json."""
        info = ProjectInfo(
            kind=self.detect(),
            directory=self.project_path.resolve().name,
            lockfiles=[path.name for path in self.get_lockfiles()],
        )

        manifest_path = self.project_path / MANIFEST_FILE
        if not manifest_path.is_file():
            return info

        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                manifest = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read {manifest_path}: {e}")
            return info

        if not isinstance(manifest, dict):
            logger.warning(f"Ignoring {manifest_path}: top-level value is not an object")
            return info

        name = manifest.get("name")
        version = manifest.get("version")
        scripts = manifest.get("scripts")
        info.name = name if isinstance(name, str) else None
        info.version = version if isinstance(version, str) else None
        if isinstance(scripts, dict):
            info.scripts = {str(k): str(v) for k, v in scripts.items()}

        return info

    def require_project(self) -> PackageManagerKind:
        """Like detect(), but a directory without markers is an error."""
        kind = self.detect()
        if kind is PackageManagerKind.NONE:
            raise NoProjectFoundError(str(self.project_path))
        return kind


def detect(directory=".") -> PackageManagerKind:
    """Detect the package manager governing `directory`."""
    return PackageManagerDetector(directory).detect()


def require_project(directory=".") -> PackageManagerKind:
    return PackageManagerDetector(directory).require_project()
