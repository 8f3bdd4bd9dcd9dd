import pytest
from common.configs import get_config
from common.fake_cluster import FakeClusterClient, active_service

from ecsroll.core.exceptions import (
    ClusterClientError,
    ConfigurationError,
    ErrorKind,
    UpsertError,
)
from ecsroll.deployment import (
    ServiceSpec,
    ServiceUpserter,
    TaskDefinitionRegistrar,
)

SERVICES = [
    {"name": "web", "task_family": "web", "desired_count": 2},
    {"name": "web-canary", "task_family": "web", "desired_count": 1},
    {"name": "worker", "task_family": "worker", "desired_count": 3},
]

TASK_DEFINITIONS = {
    "web": {"containerDefinitions": [{"name": "app"}]},
    "worker": {"containerDefinitions": [{"name": "worker"}]},
}


def setup_upsert(client: FakeClusterClient, **kwargs):
    kwargs.setdefault("task_definitions", TASK_DEFINITIONS)
    kwargs.setdefault("services", SERVICES)
    config = get_config(**kwargs)
    registered = TaskDefinitionRegistrar(client).register(
        config.task_definitions
    )
    return ServiceUpserter(client, cluster=config.cluster), config, registered


def test_update_existing_services(capsys):
    client = FakeClusterClient(
        services={
            "web": active_service("old-web"),
            "web-canary": active_service("old-web"),
            "worker": active_service("old-worker"),
        }
    )
    upserter, config, registered = setup_upsert(client)
    arns = upserter.upsert(config.services, registered)

    web_arn = registered["web"].arn
    worker_arn = registered["worker"].arn
    assert arns == [web_arn, web_arn, worker_arn]
    assert client.calls_to("create_service") == []
    assert client.services["worker"]["task_definition_arn"] == worker_arn
    assert client.services["worker"]["desired_count"] == 3
    assert "Updated service web" in capsys.readouterr().out


def test_upsert_is_idempotent():
    client = FakeClusterClient(
        services={
            "web": active_service("old-web"),
            "web-canary": active_service("old-web"),
            "worker": active_service("old-worker"),
        }
    )
    upserter, config, registered = setup_upsert(client)
    upserter.upsert(config.services, registered)
    before = {name: dict(s) for name, s in client.services.items()}

    upserter.upsert(config.services, registered)

    assert client.services == before
    assert len(client.calls_to("update_service")) == 6
    assert client.calls_to("create_service") == []


def test_create_missing_service(capsys):
    client = FakeClusterClient(
        services={
            "web": active_service("old-web"),
            "worker": active_service("old-worker"),
        }
    )
    upserter, config, registered = setup_upsert(client)
    upserter.upsert(config.services, registered)

    creates = client.calls_to("create_service")
    assert creates == [
        dict(
            name="web-canary",
            desired_count=1,
            task_definition_arn=registered["web"].arn,
        )
    ]
    assert client.services["web-canary"]["status"] == "ACTIVE"
    assert "Created service web-canary" in capsys.readouterr().out


def test_create_inactive_service():
    client = FakeClusterClient(
        services={"web": dict(active_service("old-web"), status="INACTIVE")}
    )
    upserter, config, registered = setup_upsert(
        client, services=SERVICES[:1]
    )
    upserter.upsert(config.services, registered)
    assert len(client.calls_to("create_service")) == 1


def test_second_run_takes_update_path():
    client = FakeClusterClient()
    upserter, config, registered = setup_upsert(client)
    upserter.upsert(config.services, registered)
    assert len(client.calls_to("create_service")) == 3

    upserter.upsert(config.services, registered)
    assert len(client.calls_to("create_service")) == 3


def test_other_update_error_is_fatal():
    client = FakeClusterClient(
        update_error=ClusterClientError(
            "AccessDeniedException: not allowed",
            kind=ErrorKind.ACCESS_DENIED,
        )
    )
    upserter, config, registered = setup_upsert(client)
    with pytest.raises(UpsertError, match="not allowed"):
        upserter.upsert(config.services, registered)
    assert client.calls_to("create_service") == []
    assert len(client.calls_to("update_service")) == 1


def test_cluster_not_found_is_fatal():
    client = FakeClusterClient(
        update_error=ClusterClientError(
            "ClusterNotFoundException: Cluster not found.",
            kind=ErrorKind.CLUSTER_NOT_FOUND,
        )
    )
    upserter, config, registered = setup_upsert(client)
    with pytest.raises(UpsertError):
        upserter.upsert(config.services, registered)
    assert client.calls_to("create_service") == []


def test_create_error_is_fatal():
    client = FakeClusterClient(
        create_error=ClusterClientError(
            "InvalidParameterException: bad config",
            kind=ErrorKind.INVALID_PARAMETER,
        )
    )
    upserter, config, registered = setup_upsert(client)
    with pytest.raises(UpsertError, match="create service web"):
        upserter.upsert(config.services, registered)
    assert len(client.calls_to("create_service")) == 1


def test_unknown_family():
    client = FakeClusterClient()
    upserter, config, registered = setup_upsert(client)
    service = ServiceSpec(name="api", task_family="api", desired_count=1)
    with pytest.raises(ConfigurationError, match="api"):
        upserter.upsert([service], registered)
    assert client.calls_to("update_service") == []
