"""
Node version manager handoff (nvm, then n).

nvm is a shell function loaded from $NVM_DIR/nvm.sh, not an executable, so it
is detected through that script and run inside a bash child that sources it.
"""
import os
import shutil
from pathlib import Path
from typing import Callable, Optional

from pmkit.models import CommandLine
from pmkit.utils.exceptions import VersionManagerNotFoundError

NVM_SCRIPT = "nvm.sh"
NVM_USE = 'source "$1/nvm.sh" && nvm use "$2"'


def find_nvm_script(nvm_dir: Optional[str] = None) -> Optional[Path]:
    """Location of nvm.sh, or None when nvm is not installed."""
    nvm_dir = nvm_dir if nvm_dir is not None else os.environ.get("NVM_DIR")
    if not nvm_dir:
        return None
    script = Path(nvm_dir) / NVM_SCRIPT
    return script if script.is_file() else None


def resolve_node_switch(
    version: str,
    available: Callable[[str], bool] = lambda binary: shutil.which(binary) is not None,
    nvm_dir: Optional[str] = None,
) -> CommandLine:
    """Command that switches the active Node version, preferring nvm over n.

    Args:
        version: Node version, e.g. "18"
        available: Predicate telling whether a binary is on PATH
        nvm_dir: nvm installation directory, defaults to $NVM_DIR
    """
    script = find_nvm_script(nvm_dir)
    if script is not None and available("bash"):
        return ["bash", "-c", NVM_USE, "_", str(script.parent), version]
    if available("n"):
        return ["n", version]
    raise VersionManagerNotFoundError()


def uses_nvm(command: CommandLine) -> bool:
    return NVM_USE in command
