from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from aeolis.errors import AlreadyDeclared, UnknownVariable


logger = logging.getLogger(__name__)


@dataclass
class Variable:
    """
    Descriptor of one global variable.

    `bound` is a reservation flag. Nothing sets it today, but the
    scheduler honours it.
    """

    name: str
    type: str
    value: Any = None
    ready: bool = False
    bound: bool = False


class VariableStore:
    """
    Flat, global variable store.

    Maps name -> Variable. There is exactly one store per machine and
    no per-call frames.
    """

    def __init__(self) -> None:
        self._vars: Dict[str, Variable] = {}

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def declare(self, name: str, type: str) -> Variable:
        if name in self._vars:
            raise AlreadyDeclared(name)
        var = Variable(name=name, type=type)
        self._vars[name] = var
        return var

    def delete(self, name: str) -> None:
        if name not in self._vars:
            raise UnknownVariable(name)
        del self._vars[name]

    # ----------------------------
    # Access
    # ----------------------------

    def get(self, name: str) -> Variable:
        if name not in self._vars:
            raise UnknownVariable(name)
        return self._vars[name]

    def read(self, name: str) -> Any:
        return self.get(name).value

    def write(self, name: str, value: Any, ready: bool = True) -> None:
        var = self.get(name)
        var.value = value
        var.ready = ready
        logger.debug("%s <- %r (ready=%s)", name, value, ready)

    def is_ready(self, name: str) -> bool:
        return self.get(name).ready

    def exists(self, name: str) -> bool:
        return name in self._vars

    def names(self) -> List[str]:
        return list(self._vars)

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {
            name: {k: v for k, v in asdict(var).items() if k != "name"}
            for name, var in self._vars.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)
