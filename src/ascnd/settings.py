"""Client configuration via constructor arguments or environment variables."""

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ascnd.exceptions import ConfigurationError
from ascnd.validators import Endpoint, parse_endpoint

# Messages travel as MessagePack, so the default target is a locally run
# service speaking that encoding rather than the protobuf production host.
DEFAULT_BASE_URL = "http://localhost:50051"
DEFAULT_TIMEOUT_SECONDS = 30.0

_VALUE_ERROR_PREFIX = "Value error, "


class AscndClientOptions(BaseSettings):
    """Validated connection options.

    Invalid values raise ConfigurationError, not pydantic's ValidationError.
    """

    model_config = SettingsConfigDict(env_prefix="ASCND_", frozen=True)

    # Required, no default. Obtain one from https://dashboard.ascnd.gg
    api_key: str = Field(default="", validate_default=True)
    base_url: str = Field(default=DEFAULT_BASE_URL, validate_default=True)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __init__(self, **values: Any) -> None:  # noqa: ANN401
        try:
            super().__init__(**values)
        except ValidationError as e:
            raise ConfigurationError(_describe_validation_error(e)) from e

    @field_validator("api_key", mode="before")
    @classmethod
    def validate_api_key(cls, v: str | None) -> str:
        if v is None or not str(v).strip():
            raise ValueError("api_key is required. Obtain one from https://dashboard.ascnd.gg")
        return v

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("base_url is required.")
        parse_endpoint(v)
        return v.strip()

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_seconds must be greater than zero.")
        return v

    @property
    def endpoint(self) -> Endpoint:
        return parse_endpoint(self.base_url)


def load_options(**values: Any) -> AscndClientOptions:  # noqa: ANN401
    """Build validated options.

    Arguments left as None fall back to ASCND_* environment variables and
    then to the defaults.
    """
    explicit = {name: value for name, value in values.items() if value is not None}
    return AscndClientOptions(**explicit)


def _describe_validation_error(error: ValidationError) -> str:
    messages = []
    for detail in error.errors():
        msg = detail["msg"].removeprefix(_VALUE_ERROR_PREFIX)
        field = ".".join(str(part) for part in detail["loc"])
        messages.append(msg if field in msg else f"{field}: {msg}")
    return "; ".join(messages)
