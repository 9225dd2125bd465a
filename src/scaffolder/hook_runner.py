"""Run pre/post lifecycle hook scripts shipped with a scaffold source."""

import logging
import stat
import subprocess
from pathlib import Path

from scaffolder.errors import HookFailed

logger = logging.getLogger(__name__)


def run_process(script_path):
    """Spawn *script_path* with no arguments, wait, and return its exit status.

    Adds the user-execute bit first if the script lacks it.
    """
    script_path = Path(script_path)
    current_mode = script_path.stat().st_mode
    if not current_mode & stat.S_IXUSR:
        script_path.chmod(current_mode | stat.S_IXUSR)
    return subprocess.run([str(script_path)]).returncode


class HookRunner:
    """Runs hook scripts relative to a scaffold's resolved source directory.

    Args:
        source_directory: The resolved scaffold source, not the output directory.
        process_runner: Callable(path) -> exit status.
    """

    def __init__(self, source_directory, process_runner=run_process):
        self._source_directory = Path(source_directory)
        self._process_runner = process_runner

    def script_path(self, script):
        return self._source_directory / script

    def run(self, script):
        """Run *script*; a None script is a no-op.

        Raises:
            HookFailed: If the script is missing, cannot be spawned, or exits non-zero.
        """
        if script is None:
            return
        script_path = self.script_path(script)
        if not script_path.is_file():
            raise HookFailed(script_path, reason="does not exist")
        logger.debug("Running hook %s", script_path)
        try:
            exit_status = self._process_runner(script_path)
        except OSError as e:
            raise HookFailed(script_path, reason=f"could not be run: {e}") from e
        if exit_status != 0:
            raise HookFailed(script_path, exit_status)
