from tol.engine.tcl import TclEngine, TclSession

__all__ = ["TclEngine", "TclSession"]
