"""
AWS ECS cluster client.
"""

from __future__ import annotations

__all__ = ["AmazonECS"]

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ecsroll.core.exceptions import ClusterClientError, ErrorKind

from .._models import (
    ContainerDefinition,
    Failure,
    RunTaskResult,
    Task,
    TaskContainer,
    TaskDefinitionTemplate,
)
from ._base import BaseClusterClient

# describe_tasks accepts at most 100 task ARNs per call.
DESCRIBE_TASKS_BATCH_SIZE = 100

ERROR_KINDS = {
    "ServiceNotFoundException": ErrorKind.SERVICE_NOT_FOUND,
    "ServiceNotActiveException": ErrorKind.SERVICE_NOT_ACTIVE,
    "ClusterNotFoundException": ErrorKind.CLUSTER_NOT_FOUND,
    "InvalidParameterException": ErrorKind.INVALID_PARAMETER,
    "AccessDeniedException": ErrorKind.ACCESS_DENIED,
}


class AmazonECS(BaseClusterClient):
    region: str | None
    aws_access_key_id: str | None
    aws_secret_access_key: str | None
    aws_session_token: str | None
    profile_name: str | None
    nparams: dict[str, Any]

    _ecs_client: Any
    _init: bool = False
    _op_converter: OperationConverter
    _result_converter: ResultConverter

    def __init__(
        self,
        region: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        aws_session_token: str | None = None,
        profile_name: str | None = None,
        nparams: dict[str, Any] = {},
        **kwargs: Any,
    ):
        """Initialize AWS ECS cluster client.

        Args:
            region:
                AWS region of the ECS cluster.
                If None, the region of the AWS profile is used.
            aws_access_key_id: AWS access key ID.
            aws_secret_access_key: AWS secret access key.
            aws_session_token: AWS session token.
            profile_name: AWS profile name to use.
            nparams: Native params to the AWS client.
        """
        self.region = region
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self.aws_session_token = aws_session_token
        self.profile_name = profile_name
        self.nparams = nparams

        self._op_converter = OperationConverter()
        self._result_converter = ResultConverter()

        super().__init__(**kwargs)

    def __setup__(self) -> None:
        if self._init:
            return

        session_kwargs = {}
        if self.aws_access_key_id:
            session_kwargs["aws_access_key_id"] = self.aws_access_key_id
        if self.aws_secret_access_key:
            session_kwargs["aws_secret_access_key"] = (
                self.aws_secret_access_key
            )
        if self.aws_session_token:
            session_kwargs["aws_session_token"] = self.aws_session_token
        if self.profile_name:
            session_kwargs["profile_name"] = self.profile_name

        try:
            session = boto3.Session(**session_kwargs)
            self._ecs_client = session.client(
                "ecs", region_name=self.region, **self.nparams
            )
        except BotoCoreError as e:
            raise self._convert_error(e)
        self._init = True

    def register_task_definition(
        self,
        template: TaskDefinitionTemplate,
    ) -> str:
        self.__setup__()
        args = self._op_converter.convert_task_definition(template)
        try:
            response = self._ecs_client.register_task_definition(**args)
        except (BotoCoreError, ClientError) as e:
            raise self._convert_error(e)
        return response["taskDefinition"]["taskDefinitionArn"]

    def run_task(
        self,
        cluster: str,
        task_definition_arn: str,
        container_name: str,
        command: list[str],
        started_by: str,
    ) -> RunTaskResult:
        self.__setup__()
        args = self._op_converter.convert_run_task(
            cluster=cluster,
            task_definition_arn=task_definition_arn,
            container_name=container_name,
            command=command,
            started_by=started_by,
        )
        try:
            response = self._ecs_client.run_task(**args)
        except (BotoCoreError, ClientError) as e:
            raise self._convert_error(e)
        return self._result_converter.convert_run_task(response)

    def describe_task(self, cluster: str, task_arn: str) -> Task | None:
        tasks = self.describe_tasks(cluster=cluster, task_arns=[task_arn])
        for task in tasks:
            if task.arn == task_arn:
                return task
        return None

    def update_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> None:
        self.__setup__()
        args = self._op_converter.convert_update_service(
            cluster=cluster,
            name=name,
            desired_count=desired_count,
            task_definition_arn=task_definition_arn,
            deployment_configuration=deployment_configuration,
        )
        try:
            self._ecs_client.update_service(**args)
        except (BotoCoreError, ClientError) as e:
            raise self._convert_error(e)

    def create_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> None:
        self.__setup__()
        args = self._op_converter.convert_create_service(
            cluster=cluster,
            name=name,
            desired_count=desired_count,
            task_definition_arn=task_definition_arn,
            deployment_configuration=deployment_configuration,
        )
        try:
            self._ecs_client.create_service(**args)
        except (BotoCoreError, ClientError) as e:
            raise self._convert_error(e)

    def list_running_task_arns(self, cluster: str) -> list[str]:
        self.__setup__()
        task_arns: list[str] = []
        paginator = self._ecs_client.get_paginator("list_tasks")
        try:
            for page in paginator.paginate(
                cluster=cluster, desiredStatus="RUNNING"
            ):
                task_arns.extend(page.get("taskArns", []))
        except (BotoCoreError, ClientError) as e:
            raise self._convert_error(e)
        return task_arns

    def describe_tasks(
        self,
        cluster: str,
        task_arns: list[str],
    ) -> list[Task]:
        self.__setup__()
        tasks: list[Task] = []
        for i in range(0, len(task_arns), DESCRIBE_TASKS_BATCH_SIZE):
            batch = task_arns[i : i + DESCRIBE_TASKS_BATCH_SIZE]
            try:
                response = self._ecs_client.describe_tasks(
                    cluster=cluster, tasks=batch
                )
            except (BotoCoreError, ClientError) as e:
                raise self._convert_error(e)
            tasks.extend(
                self._result_converter.convert_task(task)
                for task in response.get("tasks", [])
            )
        return tasks

    def close(self) -> None:
        if self._init:
            self._ecs_client.close()
            self._init = False

    def _convert_error(
        self,
        error: BotoCoreError | ClientError,
    ) -> ClusterClientError:
        if isinstance(error, BotoCoreError):
            # Raised before or instead of a service response.
            return ClusterClientError(
                f"{type(error).__name__}: {error}",
                kind=ErrorKind.OTHER,
            )
        code = error.response.get("Error", {}).get("Code")
        message = error.response.get("Error", {}).get("Message") or str(
            error
        )
        return ClusterClientError(
            f"{code}: {message}" if code else message,
            kind=ERROR_KINDS.get(code or "", ErrorKind.OTHER),
            code=code,
        )


class OperationConverter:
    def convert_task_definition(
        self,
        template: TaskDefinitionTemplate,
    ) -> dict[str, Any]:
        task_def: dict[str, Any] = template.get_extra()
        task_def["family"] = template.family
        task_def["containerDefinitions"] = [
            self._convert_container(container)
            for container in template.container_definitions
        ]
        return task_def

    def _convert_container(
        self,
        container: ContainerDefinition,
    ) -> dict[str, Any]:
        container_def: dict[str, Any] = container.get_extra()
        container_def["name"] = container.name
        if container.image:
            container_def["image"] = container.image
        return container_def

    def convert_run_task(
        self,
        cluster: str,
        task_definition_arn: str,
        container_name: str,
        command: list[str],
        started_by: str,
    ) -> dict[str, Any]:
        return {
            "cluster": cluster,
            "taskDefinition": task_definition_arn,
            "count": 1,
            "startedBy": started_by,
            "overrides": {
                "containerOverrides": [
                    {
                        "name": container_name,
                        "command": command,
                    }
                ]
            },
        }

    def convert_update_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None,
    ) -> dict[str, Any]:
        args: dict[str, Any] = {
            "cluster": cluster,
            "service": name,
            "desiredCount": desired_count,
            "taskDefinition": task_definition_arn,
        }
        if deployment_configuration:
            args["deploymentConfiguration"] = deployment_configuration
        return args

    def convert_create_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None,
    ) -> dict[str, Any]:
        args: dict[str, Any] = {
            "cluster": cluster,
            "serviceName": name,
            "desiredCount": desired_count,
            "taskDefinition": task_definition_arn,
        }
        if deployment_configuration:
            args["deploymentConfiguration"] = deployment_configuration
        return args


class ResultConverter:
    def convert_run_task(self, response: dict[str, Any]) -> RunTaskResult:
        tasks = response.get("tasks") or []
        failures = [
            Failure(
                arn=failure.get("arn"),
                reason=failure.get("reason"),
                detail=failure.get("detail"),
            )
            for failure in response.get("failures") or []
        ]
        return RunTaskResult(
            task_arn=tasks[0]["taskArn"] if tasks else None,
            failures=failures,
        )

    def convert_task(self, task: dict[str, Any]) -> Task:
        return Task(
            arn=task["taskArn"],
            last_status=task.get("lastStatus"),
            desired_status=task.get("desiredStatus"),
            task_definition_arn=task.get("taskDefinitionArn"),
            containers=[
                TaskContainer(
                    name=container.get("name"),
                    exit_code=container.get("exitCode"),
                    reason=container.get("reason"),
                )
                for container in task.get("containers", [])
            ],
            stopped_reason=task.get("stoppedReason"),
        )
