"""Configuration constants and defaults.

This module contains the section names, environment variable names and
default values used by the configuration loader.
"""

# Section names
SECTION_SERVER = "server"
SECTION_CLIENT = "client"
SECTION_LOGGING = "logging"

# Secrets (environment only)
ENV_SECRET = "TACACS_SECRET"

# Meta-configuration
ENV_TACACS_CONFIG = "TACACS_CONFIG"
ENV_LOG_LEVEL = "TACACS_LOG_LEVEL"

DEFAULT_CONFIG_PATH = "/etc/tacplus/client.conf"

DEFAULT_TACACS_PORT = 49

# Default values
DEFAULTS = {
    SECTION_SERVER: {
        "hosts": "",
        "port": str(DEFAULT_TACACS_PORT),
        "timeout": "10",
    },
    SECTION_CLIENT: {
        # port / rem_addr fields of the request, as the library names them
        "tty": "python_tty0",
        "rem_addr": "python_device",
    },
    SECTION_LOGGING: {
        "level": "WARNING",
    },
}

# Keys that must only come from the environment
SECRET_KEYS = {
    SECTION_SERVER: ("secret",),
}
