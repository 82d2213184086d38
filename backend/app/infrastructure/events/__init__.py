from .in_process_dispatcher import InProcessEventDispatcher

__all__ = ["InProcessEventDispatcher"]
