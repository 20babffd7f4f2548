"""
AEOLIS Orchestration
====================

Purpose:
- Provide a single entry point from IL text to a finished run
- Keep parsing and execution as separate stages

This module:
- DOES NOT catch interpreter errors (they are fatal)
- DOES NOT write to stdout; output goes through `emit`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from aeolis.config import Settings, load_settings
from aeolis.errors import InvalidEncoding
from aeolis.il.parser import parse_program
from aeolis.runtime.machine import Machine, MachineState


logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    state: MachineState
    output: List[Any]
    dispatches: int
    variables: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.state == MachineState.HALTED


def run_source(
    source: str,
    *,
    settings: Optional[Settings] = None,
    emit: Optional[Callable[[Any], None]] = None,
) -> RunResult:
    """
    Full AEOLIS pipeline:
        IL text --> function registry --> machine --> drained queue

    Raises:
        AeolisError on any parse or runtime failure.
    """
    settings = settings or load_settings()

    # --------------------------------------------------
    # Stage 1: IL --> registry
    # --------------------------------------------------
    registry = parse_program(source, skip_blank_lines=settings.skip_blank_lines)
    logger.debug("Registered functions: %s", ", ".join(registry.names()))

    # --------------------------------------------------
    # Stage 2: run `_entry`, then drain
    # --------------------------------------------------
    machine = Machine(registry, emit=emit, max_dispatches=settings.max_dispatches)
    machine.run()

    logger.debug("Run halted after %d dispatches", machine.dispatches)

    return RunResult(
        state=machine.state,
        output=list(machine.output),
        dispatches=machine.dispatches,
        variables=machine.store.snapshot(),
    )


def run_file(
    path: Union[str, Path],
    *,
    settings: Optional[Settings] = None,
    emit: Optional[Callable[[Any], None]] = None,
) -> RunResult:
    """
    Raises:
        InvalidEncoding if the file is not UTF-8, plus anything run_source raises.
    """
    try:
        source = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(str(path), f"{e.reason} at byte {e.start}") from e
    return run_source(source, settings=settings, emit=emit)
