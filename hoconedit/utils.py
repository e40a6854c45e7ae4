from typing import Any, Mapping, TypeVar

D = TypeVar("D", bound=Mapping[str, Any])


def resolve_config(config: Mapping[str, Any] | None, default_config: D) -> D:
    """Overlay the known keys of ``config`` on a copy of ``default_config``."""
    resolved = dict(default_config)
    for key in default_config:
        if config and key in config:
            resolved[key] = config[key]
    return resolved  # type: ignore[return-value]
