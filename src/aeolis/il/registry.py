from __future__ import annotations

import logging
from typing import Dict, List

from aeolis.errors import DuplicateFunction, UnknownFunction
from aeolis.il.contract import ENTRY_FUNCTION, Function


logger = logging.getLogger(__name__)


class FunctionRegistry:
    """
    Explicit function registry.

    Maps function name -> Function. Populated once by the parser,
    read-only afterwards.
    """

    def __init__(self) -> None:
        self._functions: Dict[str, Function] = {}

    def register(self, fn: Function) -> None:
        if fn.name in self._functions:
            raise DuplicateFunction(fn.name, line_no=fn.line_no)
        self._functions[fn.name] = fn
        logger.debug("Registered function %s (%d instructions)", fn.name, len(fn.body))

    def get(self, name: str) -> Function:
        if name not in self._functions:
            raise UnknownFunction(name)
        return self._functions[name]

    def require_entry(self) -> Function:
        return self.get(ENTRY_FUNCTION)

    def names(self) -> List[str]:
        return list(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions
