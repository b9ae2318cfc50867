import copy
from typing import Any, Optional

import yaml
from rich.console import Console

console = Console(stderr=True)

DEFAULT_CONFIG: dict[str, Any] = {
    "labels": {
        "source_types": {
            "HOUSE_RDS": "House Version",
            "SENATE_RS": "Senate Version",
        },
        "fallback_source": "Source Version",
        "final": "H.R. 5009 Final",
    },
    "records": {
        "final_text_fields": [
            "finalEnrolledText",
            "final_enrolled_text",
            "H.R. 5009 ENR Text",
        ],
    },
    "report": {
        "title": "Legislative Text Comparison",
    },
    "logging": {"level": "normal"},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """
    From config.yaml, layered over DEFAULT_CONFIG.

    Args:
        config_path: Path to config file (default: config.yaml)

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f) or {}
    except FileNotFoundError:
        console.print(f"[yellow]Warning: {config_path} not found. Using default config.[/yellow]")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        console.print(f"[red]Error: {config_path} is not a mapping. Using default config.[/red]")
        return copy.deepcopy(DEFAULT_CONFIG)
    return _merge(DEFAULT_CONFIG, loaded)


def get_source_labels(config: Optional[dict[str, Any]] = None) -> dict[str, str]:
    labels = (config or DEFAULT_CONFIG).get("labels", {})
    return dict(labels.get("source_types", DEFAULT_CONFIG["labels"]["source_types"]))


def get_final_label(config: Optional[dict[str, Any]] = None) -> str:
    labels = (config or DEFAULT_CONFIG).get("labels", {})
    return labels.get("final", DEFAULT_CONFIG["labels"]["final"])


def get_final_text_fields(config: Optional[dict[str, Any]] = None) -> tuple[str, ...]:
    records = (config or DEFAULT_CONFIG).get("records", {})
    return tuple(records.get("final_text_fields", DEFAULT_CONFIG["records"]["final_text_fields"]))
