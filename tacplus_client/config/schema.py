"""Pydantic schema for TACACS+ client configuration validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.validation import MAX_FIELD_LENGTH


class ServerAddress(BaseModel):
    model_config = ConfigDict(frozen=True)
    host: str
    port: int = Field(..., ge=1, le=65535)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class ClientConfigSchema(BaseModel):
    """Validated settings handed to the transport adapter."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    servers: list[ServerAddress] = Field(..., min_length=1)
    timeout: int = Field(default=10, ge=1, le=300)
    secret: str = Field(..., min_length=1, repr=False)
    tty: str = Field(default="python_tty0", max_length=MAX_FIELD_LENGTH)
    rem_addr: str = Field(default="python_device", max_length=MAX_FIELD_LENGTH)
    log_level: str = Field(default="WARNING")

    @field_validator("tty", "rem_addr")
    @classmethod
    def _latin1_only(cls, v: str) -> str:
        try:
            v.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError("must be representable in Latin-1")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level {v!r}")
        return level
