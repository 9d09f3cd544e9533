"""
pmkit - JavaScript package manager detection and dispatch.

Detects whether a project uses npm, yarn, pnpm or bun and resolves abstract
actions into the matching command line.
"""
from pmkit.detector import PackageManagerDetector, detect
from pmkit.dispatcher import parse_action, resolve
from pmkit.models import Action, ActionKind, PackageManagerKind, ProjectContext

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionKind",
    "PackageManagerDetector",
    "PackageManagerKind",
    "ProjectContext",
    "detect",
    "parse_action",
    "resolve",
]
