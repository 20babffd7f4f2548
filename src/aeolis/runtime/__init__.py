from aeolis.runtime.machine import Machine, MachineState
from aeolis.runtime.scheduler import CallQueue, ScanResult, ScanStatus
from aeolis.runtime.store import Variable, VariableStore

__all__ = [
    "CallQueue",
    "Machine",
    "MachineState",
    "ScanResult",
    "ScanStatus",
    "Variable",
    "VariableStore",
]
