from ecsroll.core.exceptions import ClusterClientError, RegistrationError

from ._helper import apply_image
from ._models import RegisteredTaskDefinition, TaskDefinitionTemplate
from .providers import BaseClusterClient


class TaskDefinitionRegistrar:
    client: BaseClusterClient
    image: str | None

    def __init__(self, client: BaseClusterClient, image: str | None = None):
        """Initialize.

        Args:
            client: Cluster client used for registration.
            image:
                Image reference written into every container definition.
                If None, the template images are registered unchanged.
        """
        self.client = client
        self.image = image

    def register(
        self,
        templates: dict[str, TaskDefinitionTemplate],
    ) -> dict[str, RegisteredTaskDefinition]:
        registered: dict[str, RegisteredTaskDefinition] = {}
        for family, template in templates.items():
            template = apply_image(template, self.image)
            try:
                arn = self.client.register_task_definition(template)
            except ClusterClientError as e:
                raise RegistrationError(
                    f"Could not register task definition {family}: {e}"
                )
            print(f"Registered task definition {family}: {arn}")
            registered[family] = RegisteredTaskDefinition(
                family=family, template=template, arn=arn
            )
        return registered
