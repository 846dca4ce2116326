from tol.runtime.buffer import CommandBuffer
from tol.runtime.flags import CommandFlags
from tol.runtime.processor import ArgumentProcessor
from tol.runtime.state import ProcessorState

__all__ = ["ArgumentProcessor", "CommandBuffer", "CommandFlags", "ProcessorState"]
