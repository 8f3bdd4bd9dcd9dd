from ._helper import load_config
from ._models import (
    Config,
    ContainerDefinition,
    DeploymentResult,
    Failure,
    OneOffCommand,
    RegisteredTaskDefinition,
    RunTaskResult,
    ServiceSpec,
    Task,
    TaskContainer,
    TaskDefinitionTemplate,
)
from .component import Deployment
from .providers import AmazonECS, BaseClusterClient
from .registrar import TaskDefinitionRegistrar
from .runner import OneOffTaskRunner
from .upserter import ServiceUpserter
from .waiter import ConvergenceWaiter

__all__ = [
    "AmazonECS",
    "BaseClusterClient",
    "Config",
    "ContainerDefinition",
    "ConvergenceWaiter",
    "Deployment",
    "DeploymentResult",
    "Failure",
    "OneOffCommand",
    "OneOffTaskRunner",
    "RegisteredTaskDefinition",
    "RunTaskResult",
    "ServiceSpec",
    "ServiceUpserter",
    "Task",
    "TaskContainer",
    "TaskDefinitionRegistrar",
    "TaskDefinitionTemplate",
    "load_config",
]
