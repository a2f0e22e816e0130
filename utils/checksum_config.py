"""
Configuration utilities for loading, parsing, and writing checksum config files.
"""
import configparser
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from models.settings import ChecksumSettings
from services.algorithm_registry import resolve_algorithm
from utils.config.config_normalizer import ConfigNormalizer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config/checksum_config.ini"

ConfigType = Union[configparser.ConfigParser, Dict[str, Dict[str, Any]]]


def load_configuration(path: Optional[str] = None, normalize: bool = True) -> ConfigType:
    """
    Load the configuration file with optional normalization.

    A missing file is not an error: the result is simply empty (plus any
    environment overrides), and every setting falls back to its default.

    Args:
        path (str): Path to the configuration file.
        normalize (bool): Whether to apply configuration normalization and environment overrides.

    Returns:
        Union[configparser.ConfigParser, Dict]: Loaded configuration parser or normalized dict.
    """
    parser = configparser.ConfigParser()
    path = path or DEFAULT_CONFIG_PATH
    read_files = parser.read(path, encoding="utf-8")
    if read_files:
        logger.debug(f"Loaded configuration from: {path}")
    else:
        logger.debug(f"No configuration file at {path}, using defaults")

    if not normalize:
        return parser
    return ConfigNormalizer().normalize_and_override(parser)


def write_temp_config(config_dict: dict, tmp_path: str) -> Path:
    """
    Write a temporary config.ini file from a dictionary of config sections.

    Args:
        config_dict (dict): Dictionary of config sections and values.
        tmp_path (str): Path to temporary directory.

    Returns:
        Path: Path to the written config file.
    """
    config = configparser.ConfigParser()
    for section, values in config_dict.items():
        config[section] = {key: str(value) for key, value in values.items()}

    config_path = Path(tmp_path) / "test_checksum_config.ini"
    with open(config_path, "w", encoding="utf-8") as f:
        config.write(f)

    return config_path


def get_config_section(config: ConfigType, section_name: str) -> Dict[str, Any]:
    """
    Get a configuration section with case-insensitive lookup.

    Raises:
        ValueError: If the section is not found.
        TypeError: If config is not a supported type.
    """
    if config is None:
        raise ValueError("Configuration object cannot be None")
    if not isinstance(section_name, str) or not section_name.strip():
        raise ValueError("Section name must be a non-empty string")

    wanted = section_name.strip().lower()
    if isinstance(config, configparser.ConfigParser):
        sections = {name.lower(): dict(config[name]) for name in config.sections()}
    elif isinstance(config, dict):
        sections = {name.lower(): data for name, data in config.items()}
    else:
        raise TypeError(
            f"Unsupported configuration type: {type(config)}. "
            f"Expected ConfigParser or Dict[str, Dict[str, Any]]"
        )

    if wanted not in sections:
        raise ValueError(
            f"Configuration section '{section_name}' not found. "
            f"Available sections: {sorted(sections)}"
        )
    return {key.lower(): value for key, value in sections[wanted].items()}


def get_config_value(
    config: Optional[ConfigType],
    section: str,
    key: str,
    fallback: Any = None,
    value_type: type = str
) -> Any:
    """
    Get a configuration value with case-insensitive lookup and type conversion.

    Args:
        config: Configuration object (ConfigParser or normalized dict)
        section: Configuration section name
        key: Configuration key name
        fallback: Default value if not found
        value_type: Type to convert the value to (str, int, float, bool)

    Returns:
        Configuration value converted to specified type or fallback

    Raises:
        ValueError: If value cannot be converted and no fallback is given
    """
    if config is None:
        return fallback
    if not isinstance(key, str) or not key.strip():
        raise ValueError("Key name must be a non-empty string")

    try:
        section_data = get_config_section(config, section)
    except ValueError:
        return fallback

    value = section_data.get(key.strip().lower())
    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback

    try:
        if value_type == bool and isinstance(value, str):
            return value.strip().lower() in ('true', '1', 'yes', 'on', 'enabled')
        return value_type(value.strip() if isinstance(value, str) else value)
    except (ValueError, TypeError) as e:
        if fallback is not None:
            logger.warning(
                f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}. "
                f"Using fallback: {fallback}"
            )
            return fallback
        raise ValueError(
            f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}"
        )


def load_settings(config: Optional[ConfigType]) -> ChecksumSettings:
    """
    Build validated settings from a loaded configuration.

    Raises:
        ValueError: If a value is out of range or cannot be converted.
        UnsupportedAlgorithmError: If the configured default algorithm is unknown.
    """
    defaults = ChecksumSettings()
    try:
        settings = ChecksumSettings(
            default_algorithm=get_config_value(config, 'hashing', 'default_algorithm', defaults.default_algorithm),
            chunk_size=get_config_value(config, 'hashing', 'chunk_size', defaults.chunk_size, value_type=int),
            max_workers=get_config_value(config, 'hashing', 'max_workers', defaults.max_workers, value_type=int),
            literal_paths=get_config_value(config, 'hashing', 'literal_paths', defaults.literal_paths, value_type=bool),
            output_format=get_config_value(config, 'output', 'format', defaults.output_format.value).strip().lower(),
        )
    except ValidationError as e:
        raise ValueError(f"Invalid checksum configuration: {e}") from e

    resolve_algorithm(settings.default_algorithm)
    logger.debug(f"Effective settings: {settings.model_dump()}")
    return settings
