from ecsroll.core.exceptions import ConfigurationError

from ._helper import resolve_task_definition
from ._models import RegisteredTaskDefinition, ServiceSpec
from .providers import BaseClusterClient


class ServiceUpserter:
    client: BaseClusterClient
    cluster: str

    def __init__(self, client: BaseClusterClient, cluster: str):
        self.client = client
        self.cluster = cluster

    def upsert(
        self,
        services: list[ServiceSpec],
        registered: dict[str, RegisteredTaskDefinition],
    ) -> list[str]:
        """Point every service at its family's new task definition.

        Returns:
            Task definition ARN of each service, in declared order.
        """
        arns: list[str] = []
        for service in services:
            try:
                task_def = resolve_task_definition(
                    registered, service.task_family
                )
            except ConfigurationError:
                raise ConfigurationError(
                    f"Service {service.name} references "
                    f"unknown task family {service.task_family}."
                )
            action = self.client.upsert_service(
                cluster=self.cluster,
                name=service.name,
                desired_count=service.desired_count,
                task_definition_arn=task_def.arn,
                deployment_configuration=service.deployment_configuration,
            )
            print(f"{action.capitalize()} service {service.name}")
            arns.append(task_def.arn)
        return arns
