"""Unified configuration loading mechanism.

Load order: config file → environment variables → defaults
Exception: the shared secret only comes from the environment.
"""

import configparser
import os

from pydantic import ValidationError as SchemaValidationError

from tacplus_client.utils.exceptions import ConfigurationError, ValidationError
from tacplus_client.utils.logger import get_logger
from tacplus_client.utils.validation import InputValidator

from .constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULTS,
    ENV_LOG_LEVEL,
    ENV_SECRET,
    ENV_TACACS_CONFIG,
    SECRET_KEYS,
    SECTION_CLIENT,
    SECTION_LOGGING,
    SECTION_SERVER,
)
from .schema import ClientConfigSchema, ServerAddress

logger = get_logger(__name__)


def resolve_config_path(source: str | None = None) -> str:
    """Pick the configuration file: explicit source, $TACACS_CONFIG, default."""
    return source or os.environ.get(ENV_TACACS_CONFIG) or DEFAULT_CONFIG_PATH


def apply_env_overrides(
    config: configparser.ConfigParser,
    section: str,
    key: str,
    env_var: str | None = None,
) -> None:
    """Apply environment variable override to config value.

    Args:
        config: ConfigParser instance
        section: Section name
        key: Key name
        env_var: Optional custom environment variable name.
                If None, derives from TACACS_SECTION_KEY pattern.
    """
    if env_var is None:
        env_var = f"TACACS_{section.upper()}_{key.upper()}"

    value = os.environ.get(env_var)
    if value is None:
        return
    if not config.has_section(section):
        config.add_section(section)
    # only overwrite if the key is not already set in the config file
    if not config.has_option(section, key):
        config.set(section, key, value)
        logger.debug(
            "Applied environment override for config key",
            event="tacplus.config.loader.env_override_applied",
            section=section,
            key=key,
            env_var=env_var,
        )
    else:
        logger.debug(
            "Skipping environment override because config already defines the value",
            event="tacplus.config.loader.env_override_skipped",
            section=section,
            key=key,
        )


def apply_defaults(config: configparser.ConfigParser) -> None:
    """Fill in every key still missing after file and environment."""
    for section, values in DEFAULTS.items():
        if not config.has_section(section):
            config.add_section(section)
        for key, value in values.items():
            if not config.has_option(section, key):
                config.set(section, key, value)


def _drop_file_secrets(config: configparser.ConfigParser, path: str) -> None:
    for section, keys in SECRET_KEYS.items():
        for key in keys:
            if config.has_option(section, key):
                config.remove_option(section, key)
                logger.warning(
                    "Ignoring secret found in configuration file; use the environment",
                    event="tacplus.config.loader.file_secret_ignored",
                    path=path,
                    section=section,
                    key=key,
                )


def load_config(source: str | None = None) -> configparser.ConfigParser:
    """Read the INI file (if present), then environment, then defaults."""
    path = resolve_config_path(source)
    config = configparser.ConfigParser(interpolation=None)

    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as fh:
                config.read_file(fh, source=path)
        except (OSError, configparser.Error) as exc:
            raise ConfigurationError(f"{path}: {exc}") from exc
        logger.debug(
            "Loaded configuration file",
            event="tacplus.config.loader.file_loaded",
            path=path,
        )
        _drop_file_secrets(config, path)
    elif source:
        # an explicitly requested file must exist
        raise ConfigurationError(f"{path}: no such configuration file")
    else:
        logger.debug(
            "No configuration file, using environment and defaults",
            event="tacplus.config.loader.file_missing",
            path=path,
        )

    for section, values in DEFAULTS.items():
        for key in values:
            apply_env_overrides(config, section, key)
    apply_env_overrides(config, SECTION_LOGGING, "level", ENV_LOG_LEVEL)
    apply_defaults(config)
    return config


def parse_servers(hosts: str, default_port: int) -> list[ServerAddress]:
    """Parse the comma separated ``host[:port]`` list, keeping its order."""
    servers = []
    for entry in hosts.split(","):
        if not entry.strip():
            continue
        try:
            host, port = InputValidator.parse_server(entry, default_port)
        except ValidationError as exc:
            raise ConfigurationError(f"server entry {entry.strip()!r}: {exc}") from exc
        servers.append(ServerAddress(host=host, port=port))
    return servers


def build_client_config(config: configparser.ConfigParser) -> ClientConfigSchema:
    """Validate a loaded ConfigParser into the settings the session needs."""
    try:
        default_port = InputValidator.validate_port(config.get(SECTION_SERVER, "port"))
    except ValidationError as exc:
        raise ConfigurationError(f"server port: {exc}") from exc

    servers = parse_servers(config.get(SECTION_SERVER, "hosts"), default_port)
    if not servers:
        raise ConfigurationError("no TACACS+ servers configured")

    secret = os.environ.get(ENV_SECRET)
    if not secret:
        raise ConfigurationError(f"shared secret not set (export {ENV_SECRET})")

    try:
        return ClientConfigSchema(
            servers=servers,
            timeout=config.get(SECTION_SERVER, "timeout"),
            secret=secret,
            tty=config.get(SECTION_CLIENT, "tty"),
            rem_addr=config.get(SECTION_CLIENT, "rem_addr"),
            log_level=config.get(SECTION_LOGGING, "level"),
        )
    except SchemaValidationError as exc:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]) or "config" for err in exc.errors()
        )
        raise ConfigurationError(f"invalid configuration ({fields})") from exc


def load_client_config(source: str | None = None) -> ClientConfigSchema:
    """Load and validate client configuration from ``source``."""
    return build_client_config(load_config(source))
