from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ..checksum.algorithms import HashAlgorithm
from ..constants import DEFAULT_HTTP_TIMEOUT, STREAMING_CHUNK_SIZE


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )


class StrictBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="forbid", validate_assignment=True, env_nested_delimiter="__")


class ProgressConfig(StrictBaseModel):
    enabled: bool = True
    """
    Whether to show a progress bar while downloading.
    A progress bar is only shown if the server announces the content length.
    """

    max_width: Annotated[int, Field(gt=0)] | None = None
    """
    Maximum width of the progress bar line in characters, capped at the terminal width.
    """


class DownloadConfig(StrictBaseSettings):
    model_config = SettingsConfigDict(env_prefix="checked_download_")

    checksum_algorithm: HashAlgorithm = HashAlgorithm.SHA256
    """
    Hash algorithm used to validate checksums when none is given on the command line.
    """

    timeout: Annotated[float, Field(gt=0)] = DEFAULT_HTTP_TIMEOUT
    """
    Connect and read timeout for HTTP requests in seconds.
    """

    chunk_size: Annotated[int, Field(gt=0)] = STREAMING_CHUNK_SIZE
    """
    Size of the chunks the payload is streamed in, in bytes.
    """

    mkdirs: bool = True
    """
    Whether to create missing parent directories of the destination file.
    """

    progress: ProgressConfig = ProgressConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # values from config files are passed as init kwargs; the environment overrides them
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("checksum_algorithm", mode="before")
    @classmethod
    def parse_checksum_algorithm(cls, v):
        if isinstance(v, str):
            return HashAlgorithm.parse(v)
        return v
