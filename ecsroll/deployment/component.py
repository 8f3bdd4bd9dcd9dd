from ._models import Config, DeploymentResult
from .providers import BaseClusterClient
from .registrar import TaskDefinitionRegistrar
from .runner import DEFAULT_POLL_INTERVAL, DEFAULT_STARTED_BY, OneOffTaskRunner
from .upserter import ServiceUpserter
from .waiter import ConvergenceWaiter

DEFAULT_WAIT_TIME = 600


class Deployment:
    config: Config
    client: BaseClusterClient
    image: str | None
    wait_time: float
    poll_interval: float
    started_by: str

    def __init__(
        self,
        config: Config,
        client: BaseClusterClient,
        image: str | None = None,
        wait_time: float = DEFAULT_WAIT_TIME,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        started_by: str = DEFAULT_STARTED_BY,
    ):
        """Initialize.

        Args:
            config:
                Rollout configuration.
            client:
                Cluster client shared by every stage.
            image:
                Image reference to roll out. If None, the images in the
                task definition templates are used.
            wait_time:
                Seconds to wait for each one-off command and for the
                services to converge.
            poll_interval:
                Seconds between cluster queries while waiting.
            started_by:
                Marker attached to one-off tasks.
        """
        self.config = config
        self.client = client
        self.image = image
        self.wait_time = wait_time
        self.poll_interval = poll_interval
        self.started_by = started_by

    def run(self) -> DeploymentResult:
        """Register, run one-off commands, upsert services and wait."""
        config = self.config
        config.validate_families()

        registrar = TaskDefinitionRegistrar(
            client=self.client, image=self.image
        )
        registered = registrar.register(config.task_definitions)

        runner = OneOffTaskRunner(
            client=self.client,
            cluster=config.cluster,
            wait_time=self.wait_time,
            poll_interval=self.poll_interval,
            started_by=self.started_by,
        )
        runner.run(config.one_off_commands, registered)

        upserter = ServiceUpserter(client=self.client, cluster=config.cluster)
        service_arns = upserter.upsert(config.services, registered)

        waiter = ConvergenceWaiter(
            client=self.client,
            cluster=config.cluster,
            wait_time=self.wait_time,
            poll_interval=self.poll_interval,
        )
        waiter.wait(service_arns)

        services = ", ".join(s.name for s in config.services) or "no services"
        print(
            f"Rolled out {self.image or 'current images'} "
            f"to cluster {config.cluster}: {services}"
        )
        return DeploymentResult(
            cluster=config.cluster,
            image=self.image,
            registered=registered,
            service_arns=service_arns,
        )
