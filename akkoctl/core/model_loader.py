"""Device-model table loading and validation from YAML rows."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from akkoctl.core.errors import ModelLoadError, ModelValidationError
from akkoctl.core.model import DeviceModel

LOGGER = logging.getLogger(__name__)
_SUFFIXES = (".yml", ".yaml")


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ModelValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedModels:
    models: dict[str, DeviceModel]
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("akkoctl.schemas").joinpath("model.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _model_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "akkoctl/models", xdg_data / "akkoctl/models"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelLoadError(f"Could not read model file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ModelValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ModelValidationError(f"Model file {path} must contain a mapping at root")
    return loaded


def _parse_usb_id(value: str, *, context: str) -> int:
    parsed = int(value.strip(), 16)
    if parsed == 0:
        raise ModelValidationError(f"{context} must not be zero")
    return parsed


def _build_model(doc: dict[str, Any], source: Path | Traversable, validator: Any) -> DeviceModel:
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ModelValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    return DeviceModel(
        id=doc["id"],
        name=doc["name"].strip(),
        vendor_id=_parse_usb_id(doc["vendor_id"], context=f"{doc['id']}.vendor_id"),
        product_id=_parse_usb_id(doc["product_id"], context=f"{doc['id']}.product_id"),
        aliases=tuple(alias.strip() for alias in doc.get("aliases", [])),
    )


def _model_paths() -> list[Path | Traversable]:
    packaged = sorted(
        (item for item in resources.files("akkoctl.models").iterdir() if item.name.endswith(_SUFFIXES)),
        key=lambda p: p.name,
    )
    user: list[Path] = []
    for directory in _model_dirs():
        if directory.is_dir():
            user.extend(sorted(p for p in directory.iterdir() if p.name.endswith(_SUFFIXES)))
    return [*packaged, *user]


def load_models() -> LoadedModels:
    """Load packaged model rows, then user rows, which replace packaged ones by id."""
    validator = _load_schema_validator()
    models: dict[str, DeviceModel] = {}
    warnings: list[str] = []

    for path in _model_paths():
        model = _build_model(_read_yaml(path), path, validator)
        if model.id in models:
            warning = f"User model '{model.id}' overrides packaged model"
            LOGGER.warning(warning)
            warnings.append(warning)
        models[model.id] = model

    return LoadedModels(models=models, warnings=tuple(warnings))
