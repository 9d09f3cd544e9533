"""
Action dispatcher for pmkit.

Translates an abstract Action into the concrete command line for a package
manager. Resolution is pure: nothing here touches the filesystem or spawns a
process.
"""
import logging
from typing import Dict, List, Sequence

from pmkit.models import Action, ActionKind, CommandLine, PackageManagerKind
from pmkit.utils.exceptions import InvalidActionError, UnsupportedManagerError

logger = logging.getLogger(__name__)


# Named shortcuts map to the script of the same name.
SCRIPT_SHORTCUTS: Dict[str, str] = {
    "dev": "dev",
    "build": "build",
    "test": "test",
    "lint": "lint",
    "start": "start",
    "preview": "preview",
    "format": "format",
    "watch": "watch",
}

# Single-letter aliases accepted on the command line.
ACTION_ALIASES: Dict[str, str] = {
    "i": "install",
    "r": "run",
    "d": "dev",
    "b": "build",
    "l": "lint",
    "t": "test",
    "s": "start",
    "p": "preview",
    "f": "format",
    "w": "watch",
}

_INSTALL = {
    PackageManagerKind.NPM: ["npm", "install"],
    PackageManagerKind.YARN: ["yarn", "install"],
    PackageManagerKind.PNPM: ["pnpm", "install"],
    PackageManagerKind.BUN: ["bun", "install"],
}

_RUN = {
    PackageManagerKind.NPM: ["npm", "run"],
    PackageManagerKind.YARN: ["yarn", "run"],
    PackageManagerKind.PNPM: ["pnpm", "run"],
    PackageManagerKind.BUN: ["bun", "run"],
}

_ADD = {
    PackageManagerKind.NPM: ["npm", "install", "--save"],
    PackageManagerKind.YARN: ["yarn", "add"],
    PackageManagerKind.PNPM: ["pnpm", "add"],
    PackageManagerKind.BUN: ["bun", "add"],
}

_ADD_DEV = {
    PackageManagerKind.NPM: ["npm", "install", "--save-dev"],
    PackageManagerKind.YARN: ["yarn", "add", "--dev"],
    PackageManagerKind.PNPM: ["pnpm", "add", "-D"],
    PackageManagerKind.BUN: ["bun", "add", "-D"],
}

_ADD_GLOBAL = {
    PackageManagerKind.NPM: ["npm", "install", "--global"],
    PackageManagerKind.YARN: ["yarn", "global", "add"],
    PackageManagerKind.PNPM: ["pnpm", "add", "-g"],
    PackageManagerKind.BUN: ["bun", "add", "-g"],
}

_REMOVE = {
    PackageManagerKind.NPM: ["npm", "uninstall"],
    PackageManagerKind.YARN: ["yarn", "remove"],
    PackageManagerKind.PNPM: ["pnpm", "remove"],
    PackageManagerKind.BUN: ["bun", "remove"],
}

_UPDATE = {
    PackageManagerKind.NPM: ["npm", "update"],
    PackageManagerKind.YARN: ["yarn", "upgrade"],
    PackageManagerKind.PNPM: ["pnpm", "update"],
    PackageManagerKind.BUN: ["bun", "update"],
}


def script_name(token: str) -> str:
    """Map a shortcut to its script; unknown tokens pass through verbatim."""
    return SCRIPT_SHORTCUTS.get(token, token)


def install_command(kind: PackageManagerKind) -> CommandLine:
    """Command that (re)installs dependencies for `kind`."""
    return resolve(kind, Action.install())


def resolve(kind: PackageManagerKind, action: Action) -> CommandLine:
    """Resolve `action` against `kind` into a command line.

    Args:
        kind: Detected package manager
        action: Abstract action to perform

    Returns:
        Program and arguments, ready for execution by the caller

    Raises:
        UnsupportedManagerError: if kind is NONE or not a known manager
        InvalidActionError: if the action lacks its script or packages
    """
    try:
        kind = PackageManagerKind(kind)
    except ValueError:
        raise UnsupportedManagerError(kind, action.kind) from None

    if kind is PackageManagerKind.NONE:
        raise UnsupportedManagerError(kind, action.kind)

    if action.kind is ActionKind.INSTALL or action.kind is ActionKind.CLEAN:
        # Clean ends with a reinstall; removals and cache clears live in pmkit.cleaner
        command = list(_INSTALL[kind])
    elif action.kind is ActionKind.RUN:
        if not action.script:
            raise InvalidActionError("run requires a script name")
        command = _RUN[kind] + [script_name(action.script)]
    elif action.kind is ActionKind.ADD:
        if not action.packages:
            raise InvalidActionError("add requires at least one package")
        if action.is_global:
            prefix = _ADD_GLOBAL[kind]
        elif action.dev:
            prefix = _ADD_DEV[kind]
        else:
            prefix = _ADD[kind]
        command = prefix + list(action.packages)
    elif action.kind is ActionKind.REMOVE:
        if not action.packages:
            raise InvalidActionError("remove requires at least one package")
        command = _REMOVE[kind] + list(action.packages)
    elif action.kind is ActionKind.UPDATE:
        command = list(_UPDATE[kind])
    else:
        raise InvalidActionError(f"Unknown action: {action.kind}")

    if action.kind is not ActionKind.CLEAN:
        command.extend(action.extra_args)

    logger.debug(f"Resolved {action.kind.value} for {kind.value}: {command}")
    return command


def parse_action(token: str, args: Sequence[str] = ()) -> Action:
    """Build an Action from a command-line token and its trailing arguments.

    Accepts the single-letter aliases. Tokens that are not a known action are
    treated as script names, so custom package.json scripts work directly.
    """
    name = ACTION_ALIASES.get(token, token)
    args = list(args)

    if name == "install":
        return Action.install(*args)
    if name == "run":
        if not args:
            raise InvalidActionError("run requires a script name")
        return Action.run(args[0], *args[1:])
    if name == "add":
        return _parse_add(args)
    if name == "remove":
        return Action.remove(*args)
    if name == "update":
        return Action.update(*args)
    if name == "clean":
        return Action.clean()

    return Action.run(script_name(name), *args)


def _parse_add(args: List[str]) -> Action:
    dev = False
    is_global = False
    packages = []
    for arg in args:
        if arg in ("-D", "--dev", "--save-dev"):
            dev = True
        elif arg in ("-g", "--global"):
            is_global = True
        else:
            packages.append(arg)
    return Action.add(*packages, dev=dev, is_global=is_global)
