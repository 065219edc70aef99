#  This file is part of Prioritizer.
#
#  SPDX-FileCopyrightText: 2025 Prioritizer Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Utility to write the current configuration to a TOML file."""

import enum
import json
import pprint

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import toml

import prioritizer.configuration as config


PRIORITIZER_CONFIG_TXT = "prioritizer-config.txt"
PRIORITIZER_CONFIG_TOML = "prioritizer-config.toml"
PRIORITIZER_CLI_PARAMS = "prioritizer-cli-params.txt"


def write_configuration() -> None:
    """Save the current configuration to a txt and a toml file in the report dir."""
    report_dir = Path(config.configuration.output.report_dir).resolve()
    report_dir.mkdir(parents=True, exist_ok=True)

    toml_file = report_dir / PRIORITIZER_CONFIG_TOML
    with toml_file.open("w", encoding="utf-8") as f:
        toml.dump(convert_config_to_dict(config.configuration), f)

    txt_file = report_dir / PRIORITIZER_CONFIG_TXT
    txt_file.write_text(pprint.pformat(repr(config.configuration)), encoding="utf-8")

    cli_file = report_dir / PRIORITIZER_CLI_PARAMS
    cli_file.write_text("\n".join(extract_parameter_list_from_config()), encoding="utf-8")


def convert_config_to_dict(config_obj: object) -> dict[str, Any]:
    """Converts a configuration object to a dictionary.

    Other than the built-in `dataclasses.asdict`, this function converts enum values
    to their string representation, which is required for the TOML format.

    Args:
        config_obj: The configuration object to convert.

    Returns:
        A dictionary representation of the configuration object.
    """
    return json.loads(json.dumps(config_obj, default=lambda o: o.__dict__))


def _format_value(value: Any) -> str:
    if isinstance(value, list):
        return "\n".join(_format_value(v) for v in value)
    if isinstance(value, enum.Enum):
        return value.name
    return str(value)


def _create_params_from_config_dict(cfg_dict: dict[str, Any], prefix: str = "") -> Iterable[str]:
    for key, value in cfg_dict.items():
        if isinstance(value, (str, list)) and not value:
            continue
        key_name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _create_params_from_config_dict(value, prefix=key_name)
        else:
            yield f"--{key_name}\n{_format_value(value)}"


def extract_parameter_list_from_config() -> list[str]:
    """Extracts the command-line parameters that reproduce the current configuration.

    Returns:
        One entry per parameter, the option name and its value separated by a newline
    """
    return list(
        _create_params_from_config_dict(convert_config_to_dict(config.configuration))
    )
