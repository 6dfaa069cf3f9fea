"""Environment variables: the read-only lookup source for ``{{name}}`` references.

Environments use the Postman environment shape (``name`` plus a ``values``
list of key/value entries), so exported Postman environment files load as-is.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from curl_assist.exceptions import EnvironmentFileError

logger = logging.getLogger(__name__)

VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


class EnvironmentVariable(BaseModel):
    """A single environment variable."""

    key: str
    value: str = ""
    type: Literal["default", "secret", "boolean", "number", "json"] = "default"
    enabled: bool = True
    description: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def _legacy_type(cls, value: Any) -> Any:
        # Older Postman exports use "any" / "text" for untyped values.
        if value in (None, "any", "text"):
            return "default"
        return value

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_typed_value(self) -> "EnvironmentVariable":
        if self.value == "":
            return self
        if self.type == "boolean" and self.value not in ("true", "false"):
            raise ValueError(f"Boolean variable '{self.key}' must have value 'true' or 'false'")
        if self.type == "number":
            try:
                float(self.value)
            except ValueError:
                raise ValueError(f"Number variable '{self.key}' must have a numeric value") from None
        if self.type == "json":
            try:
                json.loads(self.value)
            except json.JSONDecodeError:
                raise ValueError(f"JSON variable '{self.key}' must have valid JSON as value") from None
        return self

    def parsed_value(self) -> Any:
        """Return the value converted according to ``type``; None when disabled or empty."""
        if not self.enabled or self.value == "":
            return None
        if self.type == "boolean":
            return self.value == "true"
        if self.type == "number":
            number = float(self.value)
            return int(number) if number.is_integer() else number
        if self.type == "json":
            return json.loads(self.value)
        return self.value


class Environment(BaseModel):
    """A named set of variables."""

    id: str | None = None
    name: str = "New Environment"
    values: list[EnvironmentVariable] = []

    def enabled_variables(self) -> list[EnvironmentVariable]:
        return [v for v in self.values if v.enabled]


class EnvironmentStore:
    """Holds the known environments and which one is active.

    Readers only ever get snapshots (copies), so callers such as the completer
    cannot mutate the store through what they receive.

    A store built with ``from_file`` reads its file on first use. Until the
    file loads, reads raise EnvironmentFileError (a CurlAssistError), which is
    how a store reports that it is not available.
    """

    def __init__(self, environments: list[Environment] | None = None, active: str | None = None):
        self.environments: list[Environment] = list(environments or [])
        self.active_name: str | None = None
        self._pending_file: Path | None = None
        if active is not None:
            self.activate(active)
        elif len(self.environments) == 1:
            self.active_name = self.environments[0].name

    @classmethod
    def from_file(cls, file_path: Path) -> "EnvironmentStore":
        """Store whose only environment is loaded from ``file_path`` when first read."""
        store = cls()
        store._pending_file = Path(file_path)
        return store

    def _load_pending(self) -> None:
        if self._pending_file is None:
            return
        # Stays pending on failure so the next read retries.
        environment = load_environment(self._pending_file)
        self._pending_file = None
        self.add(environment)

    def add(self, environment: Environment, activate: bool = False) -> None:
        self.environments.append(environment)
        if activate or self.active_name is None:
            self.active_name = environment.name

    def activate(self, name_or_id: str) -> Environment:
        for env in self.environments:
            if name_or_id in (env.name, env.id):
                self.active_name = env.name
                return env
        raise KeyError(f"Unknown environment: {name_or_id}")

    @property
    def active_environment(self) -> Environment | None:
        self._load_pending()
        for env in self.environments:
            if env.name == self.active_name:
                return env
        return None

    def active_variables(self) -> list[EnvironmentVariable]:
        """Snapshot of the active environment's enabled variables."""
        env = self.active_environment
        if env is None:
            return []
        return [v.model_copy() for v in env.enabled_variables()]

    def resolve(self, name: str) -> str | None:
        name = name.strip()
        for variable in self.active_variables():
            if variable.key == name:
                return variable.value
        return None

    def interpolate(self, text: str) -> str:
        """Replace ``{{name}}`` references with values; unknown names are left untouched."""
        def _replace(match: re.Match) -> str:
            value = self.resolve(match.group(1))
            return match.group(0) if value is None else value

        return VARIABLE_PATTERN.sub(_replace, text)


def detect_variables(text: str) -> list[dict]:
    """Find every ``{{name}}`` reference in ``text``.

    Returns dicts of {name, match, start, end} in order of appearance.
    """
    return [
        {"name": m.group(1).strip(), "match": m.group(0), "start": m.start(), "end": m.end()}
        for m in VARIABLE_PATTERN.finditer(text or "")
    ]


def load_environment(file_path: Path) -> Environment:
    """Load a Postman environment export (JSON) or an equivalent YAML file."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EnvironmentFileError(f"Cannot read environment file {file_path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        # Tab-indented JSON is valid JSON but not valid YAML.
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            raise EnvironmentFileError(f"Invalid environment file {file_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise EnvironmentFileError(f"Environment file {file_path} must contain a mapping")

    data.setdefault("name", file_path.stem)
    try:
        environment = Environment(**data)
    except ValidationError as exc:
        raise EnvironmentFileError(f"Invalid environment file {file_path}: {exc}") from exc

    logger.debug("loaded environment %r with %d variables", environment.name, len(environment.values))
    return environment
