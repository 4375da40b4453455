"""
Execution of command sequences produced by the builder.

Steps run one after another in the calling thread. Each step is echoed
before it runs. A failing step does not stop the sequence: its status
is logged and the next step still runs.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from .builder import CHANGE_DIRECTORY, CommandDescriptor, CommandStep

LOG = logging.getLogger(__name__)

# Shell convention for "command not found / could not be started".
NOT_STARTED = 127


class Executor:
    """
    Run CommandStep objects as subprocesses.

    The working directory starts as cwd (the process directory when
    None) and is moved by `cd` steps, so steps after a clone run inside
    the cloned repository. With capture=True the output of each command
    is returned instead of going straight to the terminal.
    """

    def __init__(
        self,
        cwd: Optional[Path] = None,
        dry_run: bool = False,
        capture: bool = False,
        out: Optional[TextIO] = None,
    ) -> None:
        self.cwd = Path(cwd) if cwd is not None else None
        self.dry_run = dry_run
        self.capture = capture
        self.out = out

    def run(self, step: CommandStep) -> Tuple[int, str]:
        """
        Echo and run one step; return its exit status and captured output.

        Every command of the step runs, like a shell `a; b` line. The
        status is that of the first command that failed, or 0.
        """

        out = self.out or sys.stdout
        print(step.render(), file=out, flush=True)
        if self.dry_run:
            return 0, ""

        status = 0
        output: List[str] = []
        for command in step.commands:
            command_status, text = self._run_command(command)
            output.append(text)
            if command_status != 0:
                LOG.warning(
                    "Command exited with status %d: %s", command_status, command.render()
                )
                if status == 0:
                    status = command_status
        return status, "".join(output)

    def run_all(self, steps: Iterable[CommandStep]) -> List[Tuple[int, str]]:
        return [self.run(step) for step in steps]

    def _run_command(self, command: CommandDescriptor) -> Tuple[int, str]:
        if command.program == CHANGE_DIRECTORY:
            return self._change_directory(command)

        LOG.debug("Running command in %s: %s", self.cwd or ".", command.render())
        try:
            completed = subprocess.run(
                command.argv,
                cwd=str(self.cwd) if self.cwd is not None else None,
                check=False,
                text=True,
                capture_output=self.capture,
            )
        except OSError as exc:
            LOG.error("Failed to execute %s: %s", command.program, exc)
            return NOT_STARTED, ""

        if completed.returncode != 0 and self.capture:
            LOG.debug("%s stderr: %s", command.program, completed.stderr)
        if not self.capture:
            return completed.returncode, ""
        return completed.returncode, (completed.stdout or "") + (completed.stderr or "")

    def _change_directory(self, command: CommandDescriptor) -> Tuple[int, str]:
        target = Path(command.args[0]) if command.args else Path.home()
        if not target.is_absolute() and self.cwd is not None:
            target = self.cwd / target
        if not target.is_dir():
            LOG.error("cd: no such directory: %s", target)
            return 1, ""
        self.cwd = target
        return 0, ""
