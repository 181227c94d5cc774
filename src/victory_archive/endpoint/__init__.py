# pyright: standard

"""victory-archive: victory_archive/endpoint/__init__.py."""

import logging
from pathlib import Path

from .common import Endpoint
from .local import LocalEndpoint

logger = logging.getLogger(__name__)

__all__ = ["Endpoint", "LocalEndpoint", "choose_endpoint"]


def choose_endpoint(spec, common_config=None):
    """
    Chooses a suitable endpoint based on the specification given.

    Args:
        spec (str): The endpoint identifier, as returned by ``get_name()``
            (a filesystem path, optionally prefixed with ``file://``).
        common_config (dict): Settings shared by all endpoints.

    Returns:
        Endpoint: An instance of the appropriate `Endpoint` subclass.

    Raises:
        ValueError: If no suitable endpoint can be determined for the given specification.
    """
    config = dict(common_config or {})
    spec = str(spec)

    if spec.startswith("file://"):
        config["path"] = Path(spec[len("file://") :])
    elif "://" in spec:
        raise ValueError(
            f"No endpoint could be generated for this specification: {spec}"
        )
    elif spec:
        config["path"] = Path(spec)
    else:
        raise ValueError("Empty endpoint specification")

    endpoint = LocalEndpoint(config=config)
    logger.debug("Endpoint created: %r", endpoint)
    return endpoint
