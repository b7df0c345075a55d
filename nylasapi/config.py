import json
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nylasapi.connection import DEFAULT_API_SERVER, Connection, TransportOptions
from nylasapi.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['nylas.yaml', 'nylas.yml']


class ConnectionConfig(BaseSettings):
    """Connection settings, read from a file and ``NYLAS_*`` variables."""

    model_config = SettingsConfigDict(env_prefix='NYLAS_', extra='ignore')

    api_server: str = Field(DEFAULT_API_SERVER, description='Base URL of the API.')

    client_id: str | None = Field(
        None, description='Application client id for client-scoped endpoints.'
    )

    access_token: str | None = Field(None, description='Access token or API key.')

    timeout: float | None = Field(30.0, description='Request timeout in seconds.')

    def connection(self) -> Connection:
        """Create a connection from these settings."""
        if not self.access_token:
            raise ConfigurationError(
                'An access token is required to connect', field='access_token'
            )
        return Connection(
            api_server=self.api_server,
            client_id=self.client_id,
            access_token=self.access_token,
            options=TransportOptions(timeout=self.timeout),
        )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.load(Path(path).read_text(), Loader=yaml.FullLoader) or {}


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def load_file(path: str | Path) -> dict:
    if Path(path).suffix == '.json':
        return load_json(path)
    return load_yaml(path)


def get_config(path: str | None = None) -> ConnectionConfig:
    """Load configuration from a file, falling back to the environment.

    Values in the file take precedence over ``NYLAS_*`` environment variables.
    Without an explicit path, ``nylas.yaml``/``nylas.yml`` and then the
    ``[tool.nylasapi]`` table of ``pyproject.toml`` in the working directory
    are tried.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return ConnectionConfig(**load_file(path))

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return ConnectionConfig(**load_yaml(path))

    path = Path(os.getcwd()) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text())
        tools = pyproject.get('tool', {})

        if 'nylasapi' in tools:
            return ConnectionConfig(**tools['nylasapi'])

    return ConnectionConfig()
