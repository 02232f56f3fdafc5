from typing import Any, Optional


class CronError(Exception):
    """Base class for all scheduler errors."""


class InvalidExpressionFormat(CronError, ValueError):
    """
    Raised when a cron expression does not have exactly six fields.
    """

    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(
            f"Invalid cron format {expression!r}. "
            "Use 'second minute hour day month dayOfWeek'"
        )


class InvalidFieldSyntax(CronError, ValueError):
    """
    Raised in strict mode when a field can never be interpreted by the matcher.
    """

    def __init__(self, field_name: str, value: str):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid syntax for {field_name} field: {value!r}")


class TaskExecutionError(CronError):
    """
    Wraps an exception raised by a job's task. The original error is kept as __cause__.
    """

    def __init__(self, job_id: str, attempt: int, message: Optional[str] = None):
        self.job_id = job_id
        self.attempt = attempt
        super().__init__(message or f"Task for job {job_id} failed on attempt {attempt}")
