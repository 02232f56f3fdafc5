from datetime import datetime
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field

from simple_cron.exceptions import InvalidExpressionFormat, InvalidFieldSyntax
from simple_cron.matcher import FIELD_NAMES, is_valid_field, should_run


class ScheduleExpression(BaseModel):
    """
    A parsed six-field cron expression: second minute hour day month weekday.

    Field syntax is not validated here unless parsed in strict mode; malformed
    fields simply never match.
    """
    model_config = ConfigDict(frozen=True)

    second: str = Field(..., description="Second of minute, 0-59")
    minute: str = Field(..., description="Minute of hour, 0-59")
    hour: str = Field(..., description="Hour of day, 0-23")
    day: str = Field(..., description="Day of month, 1-31")
    month: str = Field(..., description="Month of year, 1-12")
    weekday: str = Field(..., description="Day of week, 0-6 with 0 as Sunday")

    @classmethod
    def parse(cls, expression: Any, strict: bool = False) -> "ScheduleExpression":
        """
        Parse a whitespace-separated six-field expression.

        Args:
            expression (str): The cron expression, e.g. "*/5 * * * * *".
            strict (bool): Reject fields the matcher could never interpret.

        Raises:
            InvalidExpressionFormat: If the expression does not have exactly six fields.
            InvalidFieldSyntax: In strict mode, if a field is malformed.
        """
        if not isinstance(expression, str):
            raise InvalidExpressionFormat(expression)

        parts = expression.split()
        if len(parts) != len(FIELD_NAMES):
            raise InvalidExpressionFormat(expression)

        if strict:
            for name, value in zip(FIELD_NAMES, parts):
                if not is_valid_field(value):
                    raise InvalidFieldSyntax(name, value)

        return cls(**dict(zip(FIELD_NAMES, parts)))

    @property
    def parts(self) -> Tuple[str, str, str, str, str, str]:
        return (self.second, self.minute, self.hour, self.day, self.month, self.weekday)

    def is_due(self, when: datetime) -> bool:
        return should_run(self.parts, when)

    def __str__(self) -> str:
        return " ".join(self.parts)


def parse_expression(expression: str, strict: bool = False) -> ScheduleExpression:
    return ScheduleExpression.parse(expression, strict=strict)
