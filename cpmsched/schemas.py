"""
Table schemas for scheduler input and output files.

Input:  tasks.csv     (task, duration, dependencies)
Output: output.csv    (task, duration, ES, EF, LS, LF, slack)
        timeline.csv  (Task, 0, 1, ... project_finish - 1)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskRow(BaseModel):
    """
    One row of the input task file.

    File: tasks.csv
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    task: str = Field(min_length=1, description="Unique task name")
    duration: int = Field(ge=0, description="Duration in whole time units")
    dependencies: list[str] = Field(default_factory=list, description="Names of prerequisite tasks")

    @field_validator('dependencies', mode='before')
    @classmethod
    def drop_empty_names(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(v).strip() for v in value if str(v).strip()]


class ScheduleRow(BaseModel):
    """
    Per-task timing row.

    File: output.csv
    """
    task: str = Field(description="Task name")
    duration: int = Field(ge=0, description="Task duration")
    ES: int = Field(ge=0, description="Early start")
    EF: int = Field(ge=0, description="Early finish")
    LS: int = Field(ge=0, description="Late start")
    LF: int = Field(ge=0, description="Late finish")
    slack: int = Field(ge=0, description="Late start minus early start")


TASK_TABLE_COLUMNS = list(ScheduleRow.model_fields)
TIMELINE_LABEL_COLUMN = 'Task'

# Timeline cell markers
CRITICAL_MARK = 'C'
ACTIVE_MARK = 'X'
INACTIVE_MARK = 'O'
