from .schedule import ScheduleExpression, parse_expression
from .job import Job, JobOptions, JobState

__all__ = ["ScheduleExpression", "parse_expression", "Job", "JobOptions", "JobState"]
