"""YAML configuration layers for Spawner settings.

Settings are assembled from up to three YAML files, lowest precedence
first:

1. ``built-in``: defaults/config.yaml shipped with the package (required)
2. ``user``: ~/.config/spawner/config.yaml, or $SPAWNER_CONFIG_DIR/config.yaml
3. ``project``: .spawner/config.yaml in the project root

Mappings merge key by key; any other value in a later layer replaces the
earlier one outright (lists included). SPAWNER_* environment variables
sit above every file and are handled by pydantic-settings itself.
"""

import dataclasses as _dataclasses
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

ENV_CONFIG_DIR = "SPAWNER_CONFIG_DIR"
CONFIG_FILENAME = "config.yaml"
PROJECT_CONFIG_DIR = ".spawner"


class ConfigFileError(Exception):
    """A config file could not be read or does not hold a mapping."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


@_dataclasses.dataclass(frozen=True)
class ConfigLayer:
    """One YAML file in the configuration stack."""

    name: str
    label: str
    path: _pathlib.Path
    required: bool = False


def get_builtin_defaults_path() -> _pathlib.Path:
    return _pathlib.Path(__file__).parent / "defaults" / CONFIG_FILENAME


def get_user_config_dir() -> _pathlib.Path:
    """$SPAWNER_CONFIG_DIR if set, else ~/.config/spawner."""
    override = _os.environ.get(ENV_CONFIG_DIR)
    if override:
        return _pathlib.Path(override)
    return _pathlib.Path.home() / ".config" / "spawner"


def get_user_config_path() -> _pathlib.Path:
    return get_user_config_dir() / CONFIG_FILENAME


def get_project_config_path(project_root: _pathlib.Path) -> _pathlib.Path:
    return project_root / PROJECT_CONFIG_DIR / CONFIG_FILENAME


def default_layers(project_root: _pathlib.Path | None = None) -> list[ConfigLayer]:
    """The standard stack, lowest precedence first."""
    layers = [
        ConfigLayer("built-in", "Built-in defaults", get_builtin_defaults_path(), required=True),
        ConfigLayer("user", "User config", get_user_config_path()),
    ]
    if project_root is not None:
        layers.append(
            ConfigLayer("project", "Project config", get_project_config_path(project_root))
        )
    return layers


def deep_merge(
    base: dict[str, _typing.Any],
    override: _typing.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Merge `override` onto `base` without mutating either.

    Nested dicts merge recursively; everything else is replaced.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, _typing.Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_layer(layer: ConfigLayer) -> dict[str, _typing.Any] | None:
    """
    Parse one layer.

    Returns:
        The mapping, or None when an optional file is absent or empty.

    Raises:
        ConfigFileError: Unreadable file, invalid YAML, a top-level value
            that isn't a mapping, or a required layer missing or empty.
    """
    if not layer.path.exists():
        if layer.required:
            raise ConfigFileError(
                layer.path, f"{layer.label.lower()} not found (broken installation?)"
            )
        return None

    try:
        text = layer.path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(layer.path, f"cannot read file: {e}") from e

    try:
        data = _yaml.safe_load(text)
    except _yaml.YAMLError as e:
        raise ConfigFileError(layer.path, f"invalid YAML: {e}") from e

    if data is None:
        if layer.required:
            raise ConfigFileError(layer.path, f"{layer.label.lower()} file is empty")
        return None
    if not isinstance(data, dict):
        raise ConfigFileError(
            layer.path, f"top level must be a mapping, got {type(data).__name__}"
        )
    return data


class YamlLayersSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """pydantic-settings source backed by a stack of YAML layers."""

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        layers: _typing.Sequence[ConfigLayer],
    ) -> None:
        super().__init__(settings_cls)
        self._merged: dict[str, _typing.Any] = {}
        # Layers that contributed values, lowest first
        self._applied: list[ConfigLayer] = []
        for layer in layers:
            data = read_layer(layer)
            if data:
                self._merged = deep_merge(self._merged, data)
                self._applied.append(layer)

    @property
    def applied_layers(self) -> list[ConfigLayer]:
        return list(self._applied)

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        value = self._merged.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        # Unknown keys pass through; Settings keeps them in model_extra
        return dict(self._merged)
