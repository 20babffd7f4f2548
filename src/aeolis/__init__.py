"""
AEOLIS: Asynchronous Execution Order Language Interpretation System.

A dataflow-triggered interpreter for a line-oriented IL.
"""

import logging

from aeolis.errors import AeolisError
from aeolis.orchestration import RunResult, run_file, run_source

__version__ = "0.1.0"

logging.getLogger("aeolis").addHandler(logging.NullHandler())

__all__ = ["AeolisError", "RunResult", "run_file", "run_source", "__version__"]
