import re

from ecsroll.core.exceptions import ConfigurationError

MAX_TAG_LENGTH = 128

INVALID_TAG_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def sanitize_tag(tag: str) -> str:
    """Turn an arbitrary string (e.g. a branch name) into an image tag.

    Tags may contain letters, digits, ``_``, ``.`` and ``-``, must not
    start with ``.`` or ``-`` and are at most 128 characters long.
    """
    sanitized = INVALID_TAG_CHARS.sub("-", tag.strip())
    sanitized = sanitized.lstrip(".-")[:MAX_TAG_LENGTH]
    if not sanitized:
        raise ConfigurationError(f"Cannot derive an image tag from {tag!r}.")
    return sanitized


def get_image_reference(
    repository: str,
    tag: str,
    registry: str | None = None,
) -> str:
    repository = repository.strip("/")
    if not repository:
        raise ConfigurationError("Image repository is required.")
    image = f"{repository}:{sanitize_tag(tag)}"
    if registry:
        image = f"{registry.rstrip('/')}/{image}"
    return image
