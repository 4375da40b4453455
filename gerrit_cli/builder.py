"""
Construction of external command sequences.

build() is pure: it turns an operation kind and its resolved parameters
into either an ordered list of CommandStep objects for the executor or a
block of text to print. Commands are kept as program + argument lists
and are never interpolated into shell strings.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import List, Tuple, Type, TypeVar, Union

from . import __version__
from .commands import OPERATIONS, OperationKind
from .resolver import (
    CommitParameters,
    InitParameters,
    ResolvedParameters,
    ReviewParameters,
)

GERRIT_HOST = "gerrit.delivery.epam.com"
GERRIT_REMOTE = "gerrit"
HOOKS_DIR = ".git/hooks"
COMMIT_MSG_HOOK = f"{HOOKS_DIR}/commit-msg"

# Pseudo-program understood by the executor: switch the working
# directory used for the remaining steps of the sequence.
CHANGE_DIRECTORY = "cd"


@dataclass(frozen=True)
class CommandDescriptor:
    program: str
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def render(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class CommandStep:
    """
    One entry of a command sequence.

    A step usually wraps a single command; Init's hook step fetches the
    script and then marks it executable.
    """

    commands: Tuple[CommandDescriptor, ...]

    def render(self) -> str:
        return "; ".join(command.render() for command in self.commands)


_P = TypeVar("_P")

CommandSequence = List[CommandStep]
BuildResult = Union[CommandSequence, str]


def _step(program: str, *args: str) -> CommandStep:
    return CommandStep(commands=(CommandDescriptor(program, tuple(args)),))


def remote_url(user: str, repo: str) -> str:
    return f"https://{user}@{GERRIT_HOST}/a/{repo}"


def hook_url(user: str) -> str:
    return f"https://{user}@{GERRIT_HOST}/tools/hooks/commit-msg"


def build_init(params: InitParameters) -> CommandSequence:
    url = remote_url(params.user, params.repo)
    return [
        _step("git", "clone", url),
        _step(CHANGE_DIRECTORY, params.repo),
        _step("mkdir", "-p", HOOKS_DIR),
        CommandStep(
            commands=(
                CommandDescriptor("curl", ("-Lo", COMMIT_MSG_HOOK, hook_url(params.user))),
                CommandDescriptor("chmod", ("+x", COMMIT_MSG_HOOK)),
            )
        ),
        _step("git", "remote", "add", GERRIT_REMOTE, url),
    ]


def build_commit(params: CommitParameters) -> CommandSequence:
    return [_step("git", "commit", "-m", params.message)]


def build_review(params: ReviewParameters) -> CommandSequence:
    return [_step("git", "push", GERRIT_REMOTE, f"HEAD:refs/for/{params.branch}")]


def version_text() -> str:
    return f"Gerrit version: v{__version__}"


def help_text() -> str:
    """
    Usage text generated from the command registry.
    """

    lines = ["Gerrit. Available commands:"]
    for info in OPERATIONS:
        head = info.name
        if info.aliases:
            head += f"(alias: {', '.join(info.aliases)})"
        if info.usage:
            head += f" {info.usage}"
        lines.append(f"    - {head}: {info.summary}")
    return "\n".join(lines)


def _expect(kind: OperationKind, params: ResolvedParameters, expected: Type[_P]) -> _P:
    if not isinstance(params, expected):
        raise TypeError(
            f"{kind.value} needs {expected.__name__}, got {type(params).__name__}"
        )
    return params


def build(kind: OperationKind, params: ResolvedParameters) -> BuildResult:
    """
    Return the command sequence or output text for kind.

    SET_USER and SET_REPO produce an empty sequence; their only effect is
    the config write performed by the pipeline.
    """

    if kind is OperationKind.INIT:
        return build_init(_expect(kind, params, InitParameters))
    if kind is OperationKind.COMMIT:
        return build_commit(_expect(kind, params, CommitParameters))
    if kind is OperationKind.REVIEW:
        return build_review(_expect(kind, params, ReviewParameters))
    if kind is OperationKind.SHOW_VERSION:
        return version_text()
    if kind is OperationKind.SHOW_HELP:
        return help_text()
    return []
