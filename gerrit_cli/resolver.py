"""
Argument validation and default resolution for each operation.

Given the operation kind, the tokens that followed the command token and
the persisted Config, produce a fully-resolved parameter object or raise
ArgCountError. Extra arguments beyond those an operation consumes are
ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Union

from .commands import OperationKind
from .config_store import Config
from .errors import ArgCountError

LOG = logging.getLogger(__name__)

DEFAULT_REVIEW_BRANCH = "master"

_QUOTES = frozenset("'\"")


@dataclass(frozen=True)
class InitParameters:
    user: str
    repo: str


@dataclass(frozen=True)
class CommitParameters:
    message: str


@dataclass(frozen=True)
class ReviewParameters:
    branch: str


@dataclass(frozen=True)
class ConfigUpdate:
    """A single field to write into the persisted Config."""

    field: str
    value: str


@dataclass(frozen=True)
class NoParameters:
    pass


ResolvedParameters = Union[
    InitParameters, CommitParameters, ReviewParameters, ConfigUpdate, NoParameters
]


def strip_quotes(value: str) -> str:
    """
    Remove every single and double quote character from value.

    Characters are dropped, not escaped.
    """

    return "".join(ch for ch in value if ch not in _QUOTES)


def needs_config(kind: OperationKind) -> bool:
    """Return True if resolving kind reads the persisted Config."""

    return kind is OperationKind.INIT


def resolve_arguments(
    kind: OperationKind,
    args: Sequence[str],
    config: Optional[Config] = None,
) -> ResolvedParameters:
    """
    Validate args for kind and fill missing values from config.

    config may be omitted for operations where needs_config() is False.
    """

    resolver = _RESOLVERS[kind]
    params = resolver(list(args), config or Config())
    LOG.debug("Resolved %s with %d args to %s", kind.value, len(args), params)
    return params


def _resolve_init(args: list[str], config: Config) -> InitParameters:
    if len(args) >= 2:
        return InitParameters(user=args[0], repo=args[1])

    if config.user is None:
        # Neither value can come from the config, so both are required.
        raise ArgCountError(OperationKind.INIT, 2)

    if len(args) == 1:
        return InitParameters(user=config.user, repo=args[0])

    if config.repo is None:
        raise ArgCountError(OperationKind.INIT, 1)
    return InitParameters(user=config.user, repo=config.repo)


def _resolve_commit(args: list[str], config: Config) -> CommitParameters:
    if not args:
        raise ArgCountError(OperationKind.COMMIT, 1)
    return CommitParameters(message=strip_quotes(args[0]))


def _resolve_review(args: list[str], config: Config) -> ReviewParameters:
    branch = args[0] if args else DEFAULT_REVIEW_BRANCH
    return ReviewParameters(branch=strip_quotes(branch))


def _config_update_resolver(
    kind: OperationKind, field: str
) -> Callable[[list[str], Config], ConfigUpdate]:
    def resolve(args: list[str], config: Config) -> ConfigUpdate:
        if not args:
            raise ArgCountError(kind, 1)
        return ConfigUpdate(field=field, value=args[0])

    return resolve


def _resolve_nothing(args: list[str], config: Config) -> NoParameters:
    return NoParameters()


_RESOLVERS: Dict[OperationKind, Callable[[list[str], Config], ResolvedParameters]] = {
    OperationKind.INIT: _resolve_init,
    OperationKind.COMMIT: _resolve_commit,
    OperationKind.REVIEW: _resolve_review,
    OperationKind.SET_USER: _config_update_resolver(OperationKind.SET_USER, "user"),
    OperationKind.SET_REPO: _config_update_resolver(OperationKind.SET_REPO, "repo"),
    OperationKind.SHOW_VERSION: _resolve_nothing,
    OperationKind.SHOW_HELP: _resolve_nothing,
}
