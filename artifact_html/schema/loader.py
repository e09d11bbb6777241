"""Settings loader - YAML serialization and deserialization for ConverterSettings.

Lets palettes, placeholder datasets and thresholds be reviewed and edited
as a human-readable YAML file instead of code.
"""

from pathlib import Path

import yaml

from .settings import ConverterSettings


def save_settings(settings: ConverterSettings, path: str | Path) -> None:
    """Serialize ConverterSettings to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(dump_settings(settings))


def dump_settings(settings: ConverterSettings) -> str:
    """Render ConverterSettings as a YAML string."""
    return yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False,
                     allow_unicode=True, width=120)


def load_settings(path: str | Path) -> ConverterSettings:
    """Deserialize ConverterSettings from a YAML file.

    An empty file yields the defaults.

    Raises:
        ValueError: If the document is not a mapping or a value is malformed.
    """
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return ConverterSettings()
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return ConverterSettings.from_dict(data)
