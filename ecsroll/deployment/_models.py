from typing import Any, Literal

from pydantic import model_validator

from ecsroll.core import (
    DataModel,
    DataModelField,
    FrozenDataModel,
    PassThroughModel,
)
from ecsroll.core.exceptions import ConfigurationError

STOPPED = "STOPPED"


class ContainerDefinition(PassThroughModel):
    """Container definition of a task definition template.

    Keys other than ``name`` and ``image`` are sent to the
    cluster API verbatim.
    """

    name: str
    image: str | None = None


class TaskDefinitionTemplate(PassThroughModel):
    """Task definition template for one family."""

    family: str
    container_definitions: list[ContainerDefinition] = DataModelField(
        alias="containerDefinitions", min_length=1
    )


class RegisteredTaskDefinition(DataModel):
    family: str
    template: TaskDefinitionTemplate
    arn: str


class OneOffCommand(DataModel):
    """Command run to completion before services are updated."""

    task_family: str
    command: str | list[str]


class ServiceSpec(DataModel):
    """Long running service declared for the cluster."""

    name: str
    task_family: str
    desired_count: int = DataModelField(ge=0)
    deployment_configuration: dict[str, Any] | None = None


class TaskContainer(DataModel):
    name: str | None = None
    exit_code: int | None = None
    reason: str | None = None


class Task(DataModel):
    """Task as reported by the cluster."""

    arn: str
    last_status: str | None = None
    desired_status: str | None = None
    task_definition_arn: str | None = None
    containers: list[TaskContainer] = []
    stopped_reason: str | None = None


class Failure(DataModel):
    """Task that could not be scheduled at all."""

    arn: str | None = None
    reason: str | None = None
    detail: str | None = None


class RunTaskResult(DataModel):
    task_arn: str | None = None
    failures: list[Failure] = []


UpsertAction = Literal["updated", "created"]


class Config(FrozenDataModel):
    """Rollout configuration."""

    cluster: str
    task_definitions: dict[str, TaskDefinitionTemplate]
    one_off_commands: list[OneOffCommand] = []
    services: list[ServiceSpec] = []

    @model_validator(mode="before")
    @classmethod
    def _set_families(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        task_definitions = data.get("task_definitions")
        if not isinstance(task_definitions, dict):
            return data
        normalized: dict[str, Any] = {}
        for family, template in task_definitions.items():
            if isinstance(template, dict):
                declared = template.get("family")
                if declared is not None and declared != family:
                    raise ValueError(
                        f"Task definition {family} declares "
                        f"family {declared}."
                    )
                template = {**template, "family": family}
            normalized[family] = template
        return {**data, "task_definitions": normalized}

    def validate_families(self) -> None:
        families = self.task_definitions.keys()
        for command in self.one_off_commands:
            if command.task_family not in families:
                raise ConfigurationError(
                    f"One-off command {command.command!r} references "
                    f"unknown task family {command.task_family}."
                )
        for service in self.services:
            if service.task_family not in families:
                raise ConfigurationError(
                    f"Service {service.name} references "
                    f"unknown task family {service.task_family}."
                )


class DeploymentResult(DataModel):
    cluster: str
    image: str | None = None
    registered: dict[str, RegisteredTaskDefinition] = {}
    service_arns: list[str] = []
