"""
Clean and deep-clean policies.

`clean` is scoped to the detected manager: its lockfile, its cache, its
reinstall. `deep-clean` is manager-agnostic and more aggressive: every known
lockfile, build output and bundler caches, and the cache of every manager
installed on the system.
"""
import logging
import shutil
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

from pmkit.dispatcher import install_command
from pmkit.models import (
    LOCKFILES,
    NODE_MODULES_DIR,
    CleanPlan,
    CommandLine,
    PackageManagerKind,
    ProjectContext,
)
from pmkit.utils.exceptions import CommandNotFoundError, UnsupportedManagerError

logger = logging.getLogger(__name__)


DEFAULT_BUILD_DIRS = (".next", ".nuxt", "dist", "build", "out", "coverage")
DEFAULT_CACHE_DIRS = (".parcel-cache", ".turbo", ".cache")

# bun has no cache-clear subcommand
CACHE_CLEAR_COMMANDS: Dict[PackageManagerKind, CommandLine] = {
    PackageManagerKind.NPM: ["npm", "cache", "clean", "--force"],
    PackageManagerKind.YARN: ["yarn", "cache", "clean"],
    PackageManagerKind.PNPM: ["pnpm", "store", "prune"],
}


def cache_clear_command(kind: PackageManagerKind) -> Optional[CommandLine]:
    command = CACHE_CLEAR_COMMANDS.get(kind)
    return list(command) if command else None


def plan_clean(context: ProjectContext, kind: PackageManagerKind) -> CleanPlan:
    """Plan a single-manager clean: node_modules, own lockfile, own cache, reinstall."""
    if kind is PackageManagerKind.NONE:
        raise UnsupportedManagerError(kind, "clean")

    plan = CleanPlan(
        remove_paths=[context.path / NODE_MODULES_DIR, context.path / kind.lockfile],
        install_command=install_command(kind),
    )
    cache_command = cache_clear_command(kind)
    if cache_command:
        plan.cache_commands.append(cache_command)
    return plan


def plan_deep_clean(
    context: ProjectContext,
    build_dirs: Iterable[str] = DEFAULT_BUILD_DIRS,
    cache_dirs: Iterable[str] = DEFAULT_CACHE_DIRS,
    available: Callable[[str], bool] = lambda binary: shutil.which(binary) is not None,
) -> CleanPlan:
    """Plan a deep clean for any project, whatever its detected manager.

    Args:
        context: Project to clean
        build_dirs: Build output directories to delete
        cache_dirs: Bundler cache directories to delete
        available: Predicate telling whether a manager binary is installed;
            managers that are not installed are skipped

    Returns:
        CleanPlan without a reinstall step
    """
    plan = CleanPlan()
    plan.remove_paths.append(context.path / NODE_MODULES_DIR)
    plan.remove_paths.extend(context.path / name for name in build_dirs)
    plan.remove_paths.extend(context.path / lockfile for lockfile in LOCKFILES.values())
    plan.remove_paths.extend(context.path / name for name in cache_dirs)

    for kind, command in CACHE_CLEAR_COMMANDS.items():
        if available(kind.binary):
            plan.cache_commands.append(list(command))
        else:
            logger.debug(f"Skipping {kind.value} cache: binary not found")

    return plan


def remove_path(path: Path) -> bool:
    """Delete a file or directory tree. Returns False if nothing was there."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)
    else:
        return False
    logger.debug(f"Removed {path}")
    return True


def execute_plan(plan: CleanPlan, runner, cwd: Optional[str] = None) -> int:
    """Carry out a clean plan with `runner`.

    Cache clears are best-effort: a failure is logged and the plan
    continues. Returns the reinstall exit code, or 0 when there is none.
    """
    if runner.dry_run:
        for path in plan.remove_paths:
            if path.exists():
                runner.run(["rm", "-rf", str(path)])
    else:
        for path in plan.remove_paths:
            remove_path(path)

    for command in plan.cache_commands:
        try:
            code = runner.run(command, cwd=cwd)
        except CommandNotFoundError as e:
            logger.warning(f"Skipping cache clear: {e.message}")
            continue
        if code != 0:
            logger.warning(f"Cache clear exited with {code}: {' '.join(command)}")

    if plan.install_command:
        return runner.run(plan.install_command, cwd=cwd)
    return 0
