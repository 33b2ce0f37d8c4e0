"""Configuration loader for pytempl."""
import importlib.util
from pathlib import Path
from typing import Any, Dict

from pytempl.runtime.logging import warn

DEFAULT_CONFIG_FILENAME = "pytempl.config.py"

# Uppercase names in the config module -> handler option names.
CONFIG_KEYS = {
    "STATUS": "status",
    "CONTENT_TYPE": "content_type",
    "CSS_PATH": "css_path",
    "DEBUG": "debug",
}


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for pytempl.config.py in the current working directory.

    Returns a dictionary of the recognised settings, keyed by option name.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    if not path.exists():
        return {}

    try:
        spec = importlib.util.spec_from_file_location("pytempl_config", path)
        if spec is None or spec.loader is None:
            return {}

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        warn(f"Failed to load config from {path}: {e}")
        return {}

    mapped_config = {}
    for key, option in CONFIG_KEYS.items():
        if hasattr(module, key):
            mapped_config[option] = getattr(module, key)

    if "css_path" in mapped_config:
        # Accept Path objects; middleware compares against the request path string
        mapped_config["css_path"] = str(mapped_config["css_path"])

    return mapped_config
