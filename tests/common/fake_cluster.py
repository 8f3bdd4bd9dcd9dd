from typing import Any

from ecsroll.core.exceptions import ClusterClientError, ErrorKind
from ecsroll.deployment import (
    BaseClusterClient,
    RunTaskResult,
    Task,
    TaskContainer,
    TaskDefinitionTemplate,
)

ARN_PREFIX = "arn:aws:ecs:us-east-1:123456789012"


class FakeClock:
    def __init__(self, latency: float = 0.0):
        self.time = 0.0
        self.latency = latency
        self.sleeps: list[float] = []

    def now(self) -> float:
        self.time += self.latency
        return self.time

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.time += seconds


class FakeClusterClient(BaseClusterClient):
    """In-memory cluster.

    One-off tasks stop with ``exit_code`` unless ``task_states`` holds
    scripted describe results. Services converge once
    ``running_after`` listings of running tasks have been made.
    """

    def __init__(
        self,
        services: dict[str, dict[str, Any]] | None = None,
        exit_code: int | None = 0,
        task_states: list[Task | None] | None = None,
        run_results: list[RunTaskResult] | None = None,
        running_after: int = 0,
        register_errors: dict[str, ClusterClientError] | None = None,
        update_error: ClusterClientError | None = None,
        create_error: ClusterClientError | None = None,
    ):
        self.services = services or {}
        self.exit_code = exit_code
        self.task_states = task_states
        self.run_results = run_results or []
        self.running_after = running_after
        self.register_errors = register_errors or {}
        self.update_error = update_error
        self.create_error = create_error
        self.extra_running: list[Task] = []

        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.templates: list[TaskDefinitionTemplate] = []
        self.revisions: dict[str, int] = {}
        self.tasks: dict[str, str] = {}
        self.list_count = 0
        super().__init__()

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        return [args for call, args in self.calls if call == name]

    def register_task_definition(
        self,
        template: TaskDefinitionTemplate,
    ) -> str:
        self.calls.append(("register_task_definition", {"template": template}))
        if template.family in self.register_errors:
            raise self.register_errors[template.family]
        revision = self.revisions.get(template.family, 0) + 1
        self.revisions[template.family] = revision
        self.templates.append(template)
        return f"{ARN_PREFIX}:task-definition/{template.family}:{revision}"

    def run_task(
        self,
        cluster: str,
        task_definition_arn: str,
        container_name: str,
        command: list[str],
        started_by: str,
    ) -> RunTaskResult:
        self.calls.append(
            (
                "run_task",
                dict(
                    cluster=cluster,
                    task_definition_arn=task_definition_arn,
                    container_name=container_name,
                    command=command,
                    started_by=started_by,
                ),
            )
        )
        if self.run_results:
            return self.run_results.pop(0)
        task_arn = f"{ARN_PREFIX}:task/{cluster}/{len(self.tasks) + 1}"
        self.tasks[task_arn] = container_name
        return RunTaskResult(task_arn=task_arn)

    def describe_task(self, cluster: str, task_arn: str) -> Task | None:
        self.calls.append(
            ("describe_task", dict(cluster=cluster, task_arn=task_arn))
        )
        if self.task_states is not None:
            if len(self.task_states) > 1:
                return self.task_states.pop(0)
            return self.task_states[0]
        return Task(
            arn=task_arn,
            last_status="STOPPED",
            containers=[
                TaskContainer(
                    name=self.tasks.get(task_arn),
                    exit_code=self.exit_code,
                )
            ],
        )

    def update_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> None:
        self.calls.append(
            (
                "update_service",
                dict(
                    name=name,
                    desired_count=desired_count,
                    task_definition_arn=task_definition_arn,
                ),
            )
        )
        if self.update_error:
            raise self.update_error
        service = self.services.get(name)
        if service is None:
            raise ClusterClientError(
                "ServiceNotFoundException: Service not found.",
                kind=ErrorKind.SERVICE_NOT_FOUND,
                code="ServiceNotFoundException",
            )
        if service["status"] != "ACTIVE":
            raise ClusterClientError(
                "ServiceNotActiveException: Service was not ACTIVE.",
                kind=ErrorKind.SERVICE_NOT_ACTIVE,
                code="ServiceNotActiveException",
            )
        service.update(
            desired_count=desired_count,
            task_definition_arn=task_definition_arn,
            deployment_configuration=deployment_configuration,
        )

    def create_service(
        self,
        cluster: str,
        name: str,
        desired_count: int,
        task_definition_arn: str,
        deployment_configuration: dict[str, Any] | None = None,
    ) -> None:
        self.calls.append(
            (
                "create_service",
                dict(
                    name=name,
                    desired_count=desired_count,
                    task_definition_arn=task_definition_arn,
                ),
            )
        )
        if self.create_error:
            raise self.create_error
        self.services[name] = dict(
            status="ACTIVE",
            desired_count=desired_count,
            task_definition_arn=task_definition_arn,
            deployment_configuration=deployment_configuration,
        )

    def list_running_task_arns(self, cluster: str) -> list[str]:
        self.calls.append(("list_running_task_arns", dict(cluster=cluster)))
        self.list_count += 1
        return [task.arn for task in self._running_tasks()]

    def describe_tasks(
        self,
        cluster: str,
        task_arns: list[str],
    ) -> list[Task]:
        self.calls.append(
            ("describe_tasks", dict(cluster=cluster, task_arns=task_arns))
        )
        return [
            task for task in self._running_tasks() if task.arn in task_arns
        ]

    def _running_tasks(self) -> list[Task]:
        tasks = list(self.extra_running)
        if self.list_count <= self.running_after:
            return tasks
        for name, service in self.services.items():
            if service["status"] != "ACTIVE":
                continue
            for i in range(service["desired_count"]):
                tasks.append(
                    Task(
                        arn=f"{ARN_PREFIX}:task/{name}/{i}",
                        last_status="RUNNING",
                        desired_status="RUNNING",
                        task_definition_arn=service["task_definition_arn"],
                    )
                )
        return tasks


def active_service(task_definition_arn: str, desired_count: int = 1):
    return dict(
        status="ACTIVE",
        desired_count=desired_count,
        task_definition_arn=task_definition_arn,
        deployment_configuration=None,
    )
