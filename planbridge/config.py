"""Bridge configuration file management.

Reads and writes the .planbridge_config JSON file that holds the label
of the synthetic root suite and the command-line defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "root_label": "planbridge",
    "replay_dynamic": True,
    "report_file": None,
}


class BridgeConfig:
    """Manages the .planbridge_config JSON configuration file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._load()

    def _load(self) -> None:
        """Load config from the file."""
        assert self.path is not None
        try:
            data = json.loads(self.path.read_text())
            if isinstance(data, dict):
                self._data = {**DEFAULT_CONFIG, **data}
        except (json.JSONDecodeError, OSError):
            self._data = dict(DEFAULT_CONFIG)

    def save(self) -> None:
        """Write config to the file."""
        if self.path is None:
            raise ValueError("No config file path specified")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2)
            f.write("\n")

    @property
    def config(self) -> dict[str, Any]:
        """Get the full configuration dict."""
        return dict(self._data)

    @property
    def root_label(self) -> str:
        """Get the label of the synthetic root suite."""
        return str(self._data.get("root_label") or DEFAULT_CONFIG["root_label"])

    @property
    def replay_dynamic(self) -> bool:
        """Whether the manifest's dynamic entries are replayed after the build."""
        return bool(self._data.get("replay_dynamic", DEFAULT_CONFIG["replay_dynamic"]))

    @property
    def report_file(self) -> Path | None:
        """Get the default YAML report path (None = no report)."""
        val = self._data.get("report_file")
        return Path(val) if val else None

    def set_config(
        self,
        root_label: str | None = None,
        replay_dynamic: bool | None = None,
        report_file: str | None = None,
    ) -> None:
        """Update configuration values."""
        if root_label is not None:
            self._data["root_label"] = root_label
        if replay_dynamic is not None:
            self._data["replay_dynamic"] = replay_dynamic
        if report_file is not None:
            self._data["report_file"] = report_file
