from typing import Any, Mapping, NotRequired, TypedDict
import logging
from hoconedit.utils import resolve_config


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "hoconedit",
    "is_enabled": True,
    "level": logging.INFO,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class Logger:
    """Named ``logging`` logger configured from a component's settings.

    Components carry ``enable_logger`` and ``log_level`` in their own config;
    :meth:`for_component` maps those onto a :class:`LoggerConfig`. The level
    is applied on every construction, so the most recently configured
    component decides what a shared logger name emits.
    """

    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.logger = logging.getLogger(self.config["name"])
        self.set_configuration()

    @classmethod
    def for_component(cls, name: str, component_config: Mapping[str, Any]) -> logging.Logger:
        config: LoggerConfig = {"name": name}
        if "enable_logger" in component_config:
            config["is_enabled"] = component_config["enable_logger"]
        if "log_level" in component_config:
            config["level"] = component_config["log_level"]
        return cls(config=config).logger

    def set_configuration(self):
        if not self.config["is_enabled"]:
            self.logger.disabled = True
            return

        self.logger.disabled = False
        self.logger.setLevel(self.config["level"])
        # loggers are process-wide, one handler per name is enough
        if not self.logger.handlers:
            self.formatter = logging.Formatter(self.config["format"])
            self.ch = logging.StreamHandler()
            self.ch.setFormatter(self.formatter)
            self.logger.addHandler(self.ch)
