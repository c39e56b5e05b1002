# quotesync Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "remote": {
        "endpoint_url": "",
        "poll_interval_ms": 30_000,
        "timeout_seconds": 10.0,
        "use_fallback": True,
        "fallback_latency_ms": 500,
    },
    "storage": {
        "path": "~/.config/quotesync/quotes.yaml",
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def get_default_config() -> dict[str, Any]:
    """Get a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# quotesync Configuration
#
# remote.endpoint_url: collection endpoint answering GET (list) and POST (push).
#   Leave empty to sync against the built-in simulated remote.
# remote.poll_interval_ms: background sync interval.
# remote.use_fallback: degrade to the simulated remote when the endpoint fails.
#
# Conflicts are resolved server-wins by default and can be overridden
# per quote with 'quotesync sync --interactive'.

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
