"""
LessonHub Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values are read, highest priority first, from constructor arguments,
       environment variables, a `dbconnection.properties` file, a `.env` file,
       and finally the field defaults below.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.

Properties File:
    The store credentials live in a Java-style properties file so they can be
    shared with other tooling:

        db.prefix=mongodb+srv://
        db.host=cluster0.example.mongodb.net
        db.user=lessonhub
        db.password=s3cret
        db.name=lessonhub
        db.params=retryWrites=true&w=majority

    Keys are mapped to settings fields by replacing dots with underscores
    (`db.host` → `db_host`). The file path comes from DB_PROPERTIES_FILE.

Connection Credentials:
    Credentials stay as separate, typed fields (`DatabaseConfig`) and are only
    assembled into a URI by `DatabaseConfig.connection_uri()` at the moment the
    client is created. The password is a SecretStr so it never shows up in
    reprs or logs.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type
from urllib.parse import quote_plus

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_PROPERTIES_FILE = "./dbconnection.properties"


def load_properties(path: str) -> Dict[str, str]:
    """
    Parse a `key=value` properties file into a dict.

    Blank lines and lines starting with `#` or `!` are ignored. The key ends
    at the first `=`, `:` or whitespace, whichever comes first, so values
    such as `retryWrites=true&w=majority` or `localhost:27017` survive
    intact after either separator. A missing file yields an empty dict.
    """
    file_path = Path(path)
    if not file_path.is_file():
        return {}

    properties: Dict[str, str] = {}
    for raw_line in file_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        match = _PROPERTY_LINE.match(line)
        if match is None:
            continue
        properties[match.group("key")] = match.group("value").strip()
    return properties


# `key=value`, `key: value` or `key value`; the value may be empty
_PROPERTY_LINE = re.compile(r"(?P<key>[^=:\s]+)(?:\s*[=:]\s*|\s+)(?P<value>.*)$")


class PropertiesSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a properties file (`db.host` → `db_host`)."""

    def __init__(self, settings_cls: Type[BaseSettings], path: str):
        super().__init__(settings_cls)
        self.path = path
        self._values = {
            key.replace(".", "_").lower(): value
            for key, value in load_properties(path).items()
        }

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> Tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                data[key] = value
        return data


class DatabaseConfig(BaseModel):
    """
    Structured MongoDB connection settings.

    Attributes:
        prefix:   URI scheme including `://` (`mongodb://` or `mongodb+srv://`)
        host:     Host list, e.g. `localhost:27017` or an Atlas cluster host
        user:     Optional user name (omitted from the URI when empty)
        password: Optional password
        name:     Database to select after connecting
        params:   Extra URI query parameters, without the leading `?`
    """

    prefix: str
    host: str
    user: str = ""
    password: SecretStr = SecretStr("")
    name: str
    params: str = ""

    model_config = {"frozen": True}

    def connection_uri(self) -> str:
        """Assemble the MongoDB URI. Called only when the client is opened."""
        credentials = ""
        if self.user:
            credentials = quote_plus(self.user)
            password = self.password.get_secret_value()
            if password:
                credentials += ":" + quote_plus(password)
            credentials += "@"
        uri = f"{self.prefix}{credentials}{self.host}/{self.name}"
        if self.params:
            uri += f"?{self.params}"
        return uri


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and the
    properties file.

    All settings have defaults suitable for a local MongoDB on the default
    port, so `python -m lessonhub` works without any configuration.
    """

    # ── Document Store ────────────────────────────────────────────────────
    db_prefix: str = Field(default="mongodb://")
    db_host: str = Field(default="localhost:27017")
    db_user: str = Field(default="")
    db_password: SecretStr = Field(default=SecretStr(""))
    db_name: str = Field(default="lessonhub")
    db_params: str = Field(default="")

    # Driver-level bound on how long the startup ping may wait for a server
    db_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    lessons_collection: str = Field(default="lessons")
    orders_collection: str = Field(default="orders")

    # ── Search ────────────────────────────────────────────────────────────
    # Empty search_database means "same database as db_name"
    search_database: str = Field(default="")
    search_collection: str = Field(default="lessons")
    search_text_fields: str = Field(default="title,location")
    search_numeric_fields: str = Field(default="price,availableSpaces")

    # ── Static Files ──────────────────────────────────────────────────────
    images_dir: str = Field(default="./images")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin
    cors_origins: str = Field(default="*")

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    greeting: str = Field(default="Hi There, welcome to LessonHub!")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("db_prefix")
    @classmethod
    def validate_db_prefix(cls, v: str) -> str:
        """The prefix must be a URI scheme such as `mongodb://`."""
        if not v.endswith("://"):
            raise ValueError(f"Invalid db_prefix '{v}'. Expected e.g. 'mongodb://'")
        return v

    @field_validator("db_host", "db_name", "lessons_collection", "orders_collection", "search_collection")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("db_params")
    @classmethod
    def strip_params_prefix(cls, v: str) -> str:
        return v.strip().lstrip("?")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        properties_file = os.environ.get("DB_PROPERTIES_FILE", DEFAULT_PROPERTIES_FILE)
        return (
            init_settings,
            env_settings,
            PropertiesSettingsSource(settings_cls, properties_file),
            dotenv_settings,
            file_secret_settings,
        )

    # ── Derived Values ────────────────────────────────────────────────────

    @property
    def database(self) -> DatabaseConfig:
        return DatabaseConfig(
            prefix=self.db_prefix,
            host=self.db_host,
            user=self.db_user,
            password=self.db_password,
            name=self.db_name,
            params=self.db_params,
        )

    @property
    def search_database_name(self) -> str:
        return self.search_database or self.db_name

    @property
    def search_text_fields_list(self) -> List[str]:
        return _split_csv(self.search_text_fields)

    @property
    def search_numeric_fields_list(self) -> List[str]:
        return _split_csv(self.search_numeric_fields)

    @property
    def cors_origins_list(self) -> List[str]:
        return _split_csv(self.cors_origins)


def _split_csv(value: Optional[str]) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


# Singleton instance — imported throughout the application
settings = Settings()
