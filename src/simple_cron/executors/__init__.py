from .protocol import TaskCallable, invoke_task
from .retry import ExecutionOutcome, RetryingExecutor

__all__ = ["TaskCallable", "invoke_task", "ExecutionOutcome", "RetryingExecutor"]
