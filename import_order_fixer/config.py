import configparser
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

LOG = logging.getLogger(__name__)

SECTION = "import-order-fixer"
DEFAULT_EXTENSIONS = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"]
DEFAULT_EXCLUDE = ["node_modules", "dist", "build"]


@dataclass
class FixerConfig:
    enabled: bool = True
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    semicolons: bool = False


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.replace("\n", ",").split(",") if item.strip()]


def _toml_bool(section: dict, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in configparser.ConfigParser.BOOLEAN_STATES:
        return configparser.ConfigParser.BOOLEAN_STATES[value.lower()]
    LOG.warning("Ignoring invalid boolean for %s: %r", key, value)
    return default


def _toml_list(section: dict, key: str, default: List[str]) -> List[str]:
    value = section.get(key, default)
    if isinstance(value, str):
        return _split_list(value)
    return [str(item) for item in value]


def _from_toml(section: dict) -> FixerConfig:
    config = FixerConfig()
    config.enabled = _toml_bool(section, "enabled", config.enabled)
    config.extensions = _toml_list(section, "extensions", config.extensions)
    config.exclude = _toml_list(section, "exclude", config.exclude)
    config.semicolons = _toml_bool(section, "semicolons", config.semicolons)
    return config


def _from_ini(parser: configparser.ConfigParser) -> FixerConfig:
    config = FixerConfig()
    config.enabled = parser.getboolean(SECTION, "enabled", fallback=config.enabled)
    config.semicolons = parser.getboolean(SECTION, "semicolons", fallback=config.semicolons)
    if parser.has_option(SECTION, "extensions"):
        config.extensions = _split_list(parser.get(SECTION, "extensions"))
    if parser.has_option(SECTION, "exclude"):
        config.exclude = _split_list(parser.get(SECTION, "exclude"))
    return config


def read_config(root: str) -> FixerConfig:
    """Read rule settings from pyproject.toml, setup.cfg or tox.ini, or use defaults."""
    root = Path(root)

    toml_path = root / "pyproject.toml"
    if toml_path.exists():
        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            LOG.warning("Could not read %s: %s", toml_path, e)
        else:
            section = data.get("tool", {}).get(SECTION)
            if section is not None:
                return _from_toml(section)

    for cfg_name in ("setup.cfg", "tox.ini"):
        cfg = root / cfg_name
        if not cfg.exists():
            continue
        parser = configparser.ConfigParser()
        try:
            parser.read(cfg, encoding="utf-8")
        except configparser.Error as e:
            LOG.warning("Could not read %s: %s", cfg, e)
            continue
        if parser.has_section(SECTION):
            return _from_ini(parser)

    return FixerConfig()
