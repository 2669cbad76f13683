"""
Input validation for values that end up inside a TACACS+ request.

Every variable-length field of an authorization request is preceded by a
one-byte length on the wire, so user names and AV pairs are capped at 255
bytes and a request carries at most 255 AV pairs.
"""

import ipaddress
import re

from .exceptions import ValidationError

MAX_FIELD_LENGTH = 255
MAX_AV_PAIRS = 255


class InputValidator:
    """Centralized checks for command-line and configuration input."""

    HOSTNAME_PATTERN = re.compile(
        r"^(?=.{1,253}$)[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
        r"(\.[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
    )
    # [v6addr]:port, host:port or a bare host / address
    SERVER_PATTERN = re.compile(r"^\[(?P<v6>[^\]]+)\](?::(?P<v6port>\d+))?$")

    @classmethod
    def validate_username(cls, username: str) -> str:
        """Validate the identity being authorized."""
        if username is None:
            raise ValidationError("user name is required")
        try:
            encoded = username.encode("latin-1")
        except UnicodeEncodeError:
            raise ValidationError("user name must be representable in Latin-1")
        if len(encoded) > MAX_FIELD_LENGTH:
            raise ValidationError(
                f"user name must be {MAX_FIELD_LENGTH} bytes or less"
            )
        return username

    @classmethod
    def validate_av_pair(cls, pair: str) -> str:
        """Validate a single ``attr=value`` argument."""
        if "=" not in pair:
            raise ValidationError(f"malformed attribute-value pair: {pair!r}")
        if len(pair.encode("utf-8")) > MAX_FIELD_LENGTH:
            raise ValidationError(
                f"attribute-value pair must be {MAX_FIELD_LENGTH} bytes or less"
            )
        return pair

    @classmethod
    def validate_av_pairs(cls, pairs: list[str]) -> list[str]:
        """Validate an ordered list of AV pairs, preserving order."""
        if len(pairs) > MAX_AV_PAIRS:
            raise ValidationError(
                f"at most {MAX_AV_PAIRS} attribute-value pairs are allowed"
            )
        return [cls.validate_av_pair(pair) for pair in pairs]

    @classmethod
    def validate_port(cls, port: str | int) -> int:
        """Validate port number."""
        try:
            port_num = int(port)
        except (ValueError, TypeError):
            raise ValidationError("Port must be a number")

        if not (1 <= port_num <= 65535):
            raise ValidationError("Port must be between 1 and 65535")

        return port_num

    @classmethod
    def validate_hostname(cls, hostname: str) -> str:
        """Validate a hostname or IP address literal."""
        if not hostname:
            raise ValidationError("Hostname is required")

        hostname = hostname.strip()
        try:
            return str(ipaddress.ip_address(hostname))
        except ValueError:
            pass

        if not cls.HOSTNAME_PATTERN.match(hostname):
            raise ValidationError(f"Invalid hostname format: {hostname!r}")

        return hostname.lower()

    @classmethod
    def parse_server(cls, spec: str, default_port: int) -> tuple[str, int]:
        """Split ``host[:port]`` (or ``[v6addr][:port]``) into its parts."""
        spec = spec.strip()
        if not spec:
            raise ValidationError("empty server entry")

        match = cls.SERVER_PATTERN.match(spec)
        if match:
            host = match.group("v6")
            port = match.group("v6port")
        elif spec.count(":") == 1:
            host, port = spec.split(":", 1)
        else:
            # bare hostname, IPv4 or unbracketed IPv6 address
            host, port = spec, None

        port_num = cls.validate_port(port) if port is not None else default_port
        return cls.validate_hostname(host), port_num
