from typing import Any

from ecsroll.core import Provider
from ecsroll.core.exceptions import (
    ClusterClientError,
    ErrorKind,
    UpsertError,
)

from .._models import (
    RunTaskResult,
    Task,
    TaskDefinitionTemplate,
    UpsertAction,
)

# Error kinds after which an update falls back to a create.
CREATE_ON = (ErrorKind.SERVICE_NOT_FOUND, ErrorKind.SERVICE_NOT_ACTIVE)


class BaseClusterClient(Provider):
    def register_task_definition(
        self,
        template: TaskDefinitionTemplate,
    ) -> str:
        raise NotImplementedError(
            "Register task definition must be implemented by provider."
        )

    def run_task(
        self,
        cluster: str,
        task_definition_arn: str,
        container_name: str,
        command: list[str],
        started_by: str,
    ) -> RunTaskResult:
        raise NotImplementedError(
            "Run task must be implemented by provider."
        )

    def describe_task(self, cluster: str, task_arn: str) -> Task | None:
        raise NotImplementedError(
            "Describe task must be implemented by provider."
        )

    def update_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> None:
        raise NotImplementedError(
            "Update service must be implemented by provider."
        )

    def create_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> None:
        raise NotImplementedError(
            "Create service must be implemented by provider."
        )

    def list_running_task_arns(self, cluster: str) -> list[str]:
        raise NotImplementedError(
            "List running tasks must be implemented by provider."
        )

    def describe_tasks(
        self,
        cluster: str,
        task_arns: list[str],
    ) -> list[Task]:
        raise NotImplementedError(
            "Describe tasks must be implemented by provider."
        )

    def upsert_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> UpsertAction:
        args: dict[str, Any] = dict(
            cluster=cluster,
            name=name,
            desired_count=desired_count,
            task_definition_arn=task_definition_arn,
            deployment_configuration=deployment_configuration,
        )
        try:
            self.update_service(**args)
            return "updated"
        except ClusterClientError as e:
            if e.kind not in CREATE_ON:
                raise UpsertError(f"Could not update service {name}: {e}")
        try:
            self.create_service(**args)
        except ClusterClientError as e:
            raise UpsertError(f"Could not create service {name}: {e}")
        return "created"
