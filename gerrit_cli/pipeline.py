"""
High-level orchestration for one gerrit-cli invocation.

The pipeline is linear:
  - classify the command token,
  - validate arguments and fill defaults from the config store,
  - build the command sequence or output text, and
  - hand commands to the executor or print the text.

Any stage may raise a GerritCliError, which aborts the remaining stages.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence, TextIO

from .builder import build
from .commands import OperationKind, resolve
from .config import RunConfig
from .config_store import ConfigStore
from .executor import Executor
from .resolver import ConfigUpdate, needs_config, resolve_arguments

LOG = logging.getLogger(__name__)


def run_command(
    tokens: Sequence[str],
    config: RunConfig,
    store: Optional[ConfigStore] = None,
    executor: Optional[Executor] = None,
    out: Optional[TextIO] = None,
) -> OperationKind:
    """
    Run the command named by tokens[0] with tokens[1:] as its arguments.

    The config store is only touched by operations that read or write
    it, so -v and -help work even when the store is unusable. Returns
    the operation kind that was run.
    """

    LOG.debug("Starting gerrit-cli with config: %s", config)

    out = out or sys.stdout
    store = store or ConfigStore(config.config_path)
    executor = executor or Executor(dry_run=config.dry_run, out=out)

    kind = resolve(tokens[0] if tokens else None)
    args = list(tokens[1:])

    persisted = store.load() if needs_config(kind) else None
    params = resolve_arguments(kind, args, persisted)

    if isinstance(params, ConfigUpdate):
        if config.dry_run:
            print(f"would save {params.field}={params.value}", file=out)
            return kind
        store.set_and_persist(params.field, params.value)
        return kind

    result = build(kind, params)
    if isinstance(result, str):
        print(result, file=out)
        return kind

    LOG.info("Running %d command(s) for %s", len(result), kind.value)
    executor.run_all(result)
    return kind
