"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be passed straight to deep_merge,
which always returns copies.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "editor": {
        "field_key": "new_field",
        "array_key": "new_array",
        "section_key": "new_section",
        "max_key_probes": 1000,
    },
}
