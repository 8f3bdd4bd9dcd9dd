import argparse
import sys
from typing import Any

from ecsroll._common._image_helper import get_image_reference
from ecsroll.core.exceptions import BaseError, ConfigurationError
from ecsroll.deployment import AmazonECS, Deployment, load_config
from ecsroll.deployment.component import DEFAULT_WAIT_TIME
from ecsroll.deployment.runner import DEFAULT_POLL_INTERVAL

CONFIG_FILE = "ecsroll.yaml"


def deploy(
    config: str,
    cluster: str | None,
    image: str | None,
    wait_time: float,
    poll_interval: float,
    region: str | None,
    profile: str | None,
) -> Any:
    """
    ecsroll Deploy
    """
    rollout_config = load_config(config, cluster=cluster)
    client = AmazonECS(region=region, profile_name=profile)
    try:
        return Deployment(
            config=rollout_config,
            client=client,
            image=image,
            wait_time=wait_time,
            poll_interval=poll_interval,
        ).run()
    finally:
        client.close()


def validate(config: str, cluster: str | None) -> None:
    """
    ecsroll Validate
    """
    rollout_config = load_config(config, cluster=cluster)
    print(
        f"{config} is valid: {len(rollout_config.task_definitions)} task "
        f"definitions, {len(rollout_config.one_off_commands)} one-off "
        f"commands, {len(rollout_config.services)} services "
        f"on cluster {rollout_config.cluster}"
    )


def resolve_image(
    image: str | None,
    repository: str | None,
    tag: str | None,
    registry: str | None,
) -> str | None:
    if image:
        return image
    if repository is None and tag is None:
        return None
    if not repository or not tag:
        raise ConfigurationError(
            "Both --repository and --tag are required to build the image."
        )
    return get_image_reference(
        repository=repository, tag=tag, registry=registry
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecsroll", description="Roll out images to an ECS cluster"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    deploy_parser = subparsers.add_parser(
        "deploy", help="Register, migrate, update services and wait"
    )
    validate_parser = subparsers.add_parser(
        "validate", help="Validate the rollout config"
    )
    image_parser = subparsers.add_parser(
        "image", help="Print the image reference for a repository and tag"
    )
    config_arguments = [
        ("--config", str, CONFIG_FILE, "Rollout config file"),
        ("--cluster", str, None, "Cluster name (overrides config)"),
    ]
    image_arguments = [
        ("--repository", str, None, "Image repository"),
        ("--tag", str, None, "Image tag, sanitized (e.g. branch name)"),
        ("--registry", str, None, "Image registry host"),
    ]
    deploy_arguments = [
        ("--image", str, None, "Fully-qualified image reference"),
        ("--wait-time", float, DEFAULT_WAIT_TIME, "Seconds to wait"),
        (
            "--poll-interval",
            float,
            DEFAULT_POLL_INTERVAL,
            "Seconds between cluster queries",
        ),
        ("--region", str, None, "AWS region"),
        ("--profile", str, None, "AWS profile name"),
    ]
    for arg in config_arguments:
        deploy_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3]
        )
        validate_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3]
        )
    for arg in image_arguments:
        deploy_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3]
        )
        image_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3]
        )
    for arg in deploy_arguments:
        deploy_parser.add_argument(
            arg[0], type=arg[1], default=arg[2], help=arg[3]
        )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "deploy":
            deploy(
                config=args.config,
                cluster=args.cluster,
                image=resolve_image(
                    image=args.image,
                    repository=args.repository,
                    tag=args.tag,
                    registry=args.registry,
                ),
                wait_time=args.wait_time,
                poll_interval=args.poll_interval,
                region=args.region,
                profile=args.profile,
            )
        elif args.command == "validate":
            validate(config=args.config, cluster=args.cluster)
        elif args.command == "image":
            image = resolve_image(
                image=None,
                repository=args.repository,
                tag=args.tag,
                registry=args.registry,
            )
            if image is None:
                raise ConfigurationError(
                    "--repository and --tag are required."
                )
            print(image)
        else:
            parser.print_help()
    except BaseError as e:
        print(str(e), file=sys.stderr)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
