from ecsroll.core import Time
from ecsroll.core.exceptions import (
    ConfigurationError,
    NonZeroExitError,
    SchedulingFailure,
    WaitTimeExceeded,
)

from ._helper import format_command, get_command_args, resolve_task_definition
from ._models import (
    STOPPED,
    OneOffCommand,
    RegisteredTaskDefinition,
    Task,
    TaskContainer,
)
from .providers import BaseClusterClient

DEFAULT_STARTED_BY = "ecsroll"
DEFAULT_POLL_INTERVAL = 5


class OneOffTaskRunner:
    """Runs one-off commands to completion, one at a time.

    The wait time is a soft deadline: elapsed time is summed from
    per-poll deltas, so a timeout can overshoot it by one poll
    interval plus one API call.
    """

    client: BaseClusterClient
    cluster: str
    wait_time: float
    poll_interval: float
    started_by: str

    def __init__(
        self,
        client: BaseClusterClient,
        cluster: str,
        wait_time: float,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        started_by: str = DEFAULT_STARTED_BY,
    ):
        self.client = client
        self.cluster = cluster
        self.wait_time = wait_time
        self.poll_interval = poll_interval
        self.started_by = started_by

    def run(
        self,
        commands: list[OneOffCommand],
        registered: dict[str, RegisteredTaskDefinition],
    ) -> None:
        for command in commands:
            self.run_command(command, registered)

    def run_command(
        self,
        command: OneOffCommand,
        registered: dict[str, RegisteredTaskDefinition],
    ) -> None:
        try:
            task_def = resolve_task_definition(registered, command.task_family)
        except ConfigurationError:
            raise ConfigurationError(
                f"One-off command {format_command(command.command)!r} "
                f"references unknown task family {command.task_family}."
            )
        container_name = task_def.template.container_definitions[0].name
        description = format_command(command.command)

        result = self.client.run_task(
            cluster=self.cluster,
            task_definition_arn=task_def.arn,
            container_name=container_name,
            command=get_command_args(command.command),
            started_by=self.started_by,
        )
        if result.failures:
            reasons = ", ".join(
                f"{failure.arn or 'task'}: {failure.reason}"
                + (f" ({failure.detail})" if failure.detail else "")
                for failure in result.failures
            )
            raise SchedulingFailure(
                f"Could not run {description!r} on "
                f"{command.task_family}: {reasons}"
            )
        if not result.task_arn:
            raise SchedulingFailure(
                f"Could not run {description!r} on "
                f"{command.task_family}: no task was started."
            )
        print(
            f"Running {description!r} on {task_def.family} "
            f"({result.task_arn})"
        )

        task = self._wait_for_stopped(result.task_arn, description)
        if task is not None:
            container = self._get_container(task, container_name)
            exit_code = container.exit_code if container else None
            if exit_code != 0:
                reason = (
                    (container.reason if container else None)
                    or task.stopped_reason
                    or "no reason given"
                )
                raise NonZeroExitError(
                    f"{description!r} on {task_def.family} exited with "
                    f"code {exit_code} ({reason}), aborting."
                )
        print(f"Finished {description!r} on {task_def.family}")

    def _wait_for_stopped(
        self,
        task_arn: str,
        description: str,
    ) -> Task | None:
        elapsed = 0.0
        while True:
            started = Time.now()
            task = self.client.describe_task(self.cluster, task_arn)
            if task is None or task.last_status == STOPPED:
                return task
            Time.sleep(self.poll_interval)
            elapsed += Time.now() - started
            if elapsed > self.wait_time:
                raise WaitTimeExceeded(
                    f"{description!r} did not stop within "
                    f"{self.wait_time} seconds."
                )

    def _get_container(
        self,
        task: Task,
        container_name: str,
    ) -> TaskContainer | None:
        for container in task.containers:
            if container.name == container_name:
                return container
        if task.containers:
            return task.containers[0]
        return None
