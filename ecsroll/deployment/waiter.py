from ecsroll.core import Time
from ecsroll.core.exceptions import WaitTimeExceeded

from .providers import BaseClusterClient
from .runner import DEFAULT_POLL_INTERVAL


class ConvergenceWaiter:
    """Waits until every expected task definition has a running task.

    Only presence of each ARN among running tasks is checked, not the
    number of tasks per service nor their health.
    """

    client: BaseClusterClient
    cluster: str
    wait_time: float
    poll_interval: float

    def __init__(
        self,
        client: BaseClusterClient,
        cluster: str,
        wait_time: float,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.client = client
        self.cluster = cluster
        self.wait_time = wait_time
        self.poll_interval = poll_interval

    def wait(self, task_definition_arns: list[str]) -> None:
        expected = set(task_definition_arns)
        elapsed = 0.0
        while True:
            started = Time.now()
            missing = expected
            if expected:
                missing = expected - self.get_running_task_definition_arns()
            if not missing:
                print(f"Services converged on cluster {self.cluster}")
                return
            Time.sleep(self.poll_interval)
            elapsed += Time.now() - started
            if elapsed > self.wait_time:
                raise WaitTimeExceeded(
                    f"Task definitions {', '.join(sorted(missing))} "
                    f"not running within {self.wait_time} seconds."
                )

    def get_running_task_definition_arns(self) -> set[str]:
        task_arns = self.client.list_running_task_arns(self.cluster)
        if not task_arns:
            return set()
        tasks = self.client.describe_tasks(self.cluster, task_arns)
        return {
            task.task_definition_arn
            for task in tasks
            if task.task_definition_arn
        }
