"""
Command registry for gerrit-cli.

The registry is a static table from user-facing tokens (including short
aliases) to the closed set of operations the tool knows how to perform.
Help text is generated from the same table so the two cannot drift.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import UnknownCommandError


class OperationKind(enum.Enum):
    INIT = "init"
    COMMIT = "commit"
    REVIEW = "review"
    SET_USER = "config.user"
    SET_REPO = "config.repo"
    SHOW_VERSION = "version"
    SHOW_HELP = "help"


@dataclass(frozen=True)
class OperationInfo:
    """
    Registry entry for one operation.

    tokens[0] is the primary name; the rest are aliases. usage and
    summary feed the generated help text.
    """

    kind: OperationKind
    tokens: Tuple[str, ...]
    usage: str
    summary: str

    @property
    def name(self) -> str:
        return self.tokens[0]

    @property
    def aliases(self) -> Tuple[str, ...]:
        return self.tokens[1:]


OPERATIONS: Tuple[OperationInfo, ...] = (
    OperationInfo(
        kind=OperationKind.INIT,
        tokens=("init",),
        usage="[<user>] [<repo>]",
        summary=(
            "clone <repo> as <user> and set up the commit-msg hook and the "
            "gerrit remote. Variants: init <user> <repo>, init <repo>, init. "
            "Missing values are taken from the config"
        ),
    ),
    OperationInfo(
        kind=OperationKind.COMMIT,
        tokens=("commit", "c"),
        usage="<message>",
        summary='git commit -m "<message>" (quotes are removed from the message)',
    ),
    OperationInfo(
        kind=OperationKind.REVIEW,
        tokens=("review", "r"),
        usage="[<branch>]",
        summary="git push gerrit HEAD:refs/for/<branch> (default branch: master)",
    ),
    OperationInfo(
        kind=OperationKind.SET_USER,
        tokens=("config.user", "c.user"),
        usage="<user name>",
        summary="save default user to config",
    ),
    OperationInfo(
        kind=OperationKind.SET_REPO,
        tokens=("config.repo", "c.repo"),
        usage="<repo>",
        summary="save default repo to config",
    ),
    OperationInfo(
        kind=OperationKind.SHOW_HELP,
        tokens=("-help", "-h"),
        usage="",
        summary="help",
    ),
    OperationInfo(
        kind=OperationKind.SHOW_VERSION,
        tokens=("-v",),
        usage="",
        summary="version",
    ),
)


def _build_table(operations: Tuple[OperationInfo, ...]) -> Dict[str, OperationKind]:
    table: Dict[str, OperationKind] = {}
    for info in operations:
        for token in info.tokens:
            if token in table:
                raise ValueError(f"duplicate command token {token!r}")
            table[token] = info.kind
    return table


COMMAND_TABLE: Dict[str, OperationKind] = _build_table(OPERATIONS)


def available_commands() -> List[str]:
    """Return every registered token, aliases included."""

    return list(COMMAND_TABLE)


def resolve(token: Optional[str]) -> OperationKind:
    """
    Classify a raw command token.

    Lookup is an exact, case-sensitive match against COMMAND_TABLE. A
    missing token (None) is reported the same way as an unknown one.
    """

    if token is None or token not in COMMAND_TABLE:
        raise UnknownCommandError(token, available_commands())
    return COMMAND_TABLE[token]
