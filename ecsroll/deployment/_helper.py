import shlex

from pydantic import ValidationError

from ecsroll.core import YamlLoader
from ecsroll.core.exceptions import ConfigurationError

from ._models import Config, RegisteredTaskDefinition, TaskDefinitionTemplate


def load_config(path: str, cluster: str | None = None) -> Config:
    """Load and validate a rollout config file.

    Args:
        path: Path of the YAML config file.
        cluster: Cluster name overriding the one in the file.
    """
    data = YamlLoader.load(path)
    if cluster:
        data["cluster"] = cluster
    try:
        config = Config.from_dict(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}:\n{e}")
    config.validate_families()
    return config


def apply_image(
    template: TaskDefinitionTemplate,
    image: str | None,
) -> TaskDefinitionTemplate:
    template = template.copy(deep=True)
    if image:
        for container in template.container_definitions:
            container.image = image
    return template


def get_command_args(command: str | list[str]) -> list[str]:
    if isinstance(command, str):
        return shlex.split(command)
    return [str(arg) for arg in command]


def format_command(command: str | list[str]) -> str:
    if isinstance(command, str):
        return command
    return shlex.join(command)


def resolve_task_definition(
    registered: dict[str, RegisteredTaskDefinition],
    family: str,
) -> RegisteredTaskDefinition:
    try:
        return registered[family]
    except KeyError:
        raise ConfigurationError(f"Unknown task family {family}.")
