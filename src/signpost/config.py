"""Configuration loading and defaults for signpost."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path


def get_config_dir() -> Path:
    """Get the signpost config directory (XDG-style)."""
    return Path.home() / ".config" / "signpost"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


@dataclass
class SheetConfig:
    """Size of sheet presentations, as Textual CSS scalars."""

    width: str = "80%"
    height: str = "70%"


@dataclass
class PopoverConfig:
    """Size of popover presentations, as Textual CSS scalars."""

    width: str = "50"
    height: str = "auto"


@dataclass
class RouterConfig:
    """Router configuration."""

    log_level: str = "WARNING"
    log_file: str = ""  # empty = Textual devtools console
    dismiss_key: str = "escape"
    sheet: SheetConfig = field(default_factory=SheetConfig)
    popover: PopoverConfig = field(default_factory=PopoverConfig)

    @classmethod
    def load(cls) -> "RouterConfig":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        if not config_path.exists():
            default_config = cls()
            default_config.save()
            return default_config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        sheet_data = data.get("sheet", {})
        sheet = SheetConfig(
            width=str(sheet_data.get("width", "80%")),
            height=str(sheet_data.get("height", "70%")),
        )

        popover_data = data.get("popover", {})
        popover = PopoverConfig(
            width=str(popover_data.get("width", "50")),
            height=str(popover_data.get("height", "auto")),
        )

        return cls(
            log_level=data.get("log_level", "WARNING"),
            log_file=data.get("log_file", ""),
            dismiss_key=data.get("dismiss_key", "escape"),
            sheet=sheet,
            popover=popover,
        )

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # Build TOML content manually (tomllib is read-only)
        lines = [
            '# signpost configuration',
            '',
            '# Log level for the "signpost" logger',
            f'log_level = "{self.log_level}"',
            '',
            '# Log file path; empty sends records to the Textual devtools console',
            f'log_file = "{self.log_file}"',
            '',
            '# Key that dismisses the topmost screen, sheet, alert or dialog',
            f'dismiss_key = "{self.dismiss_key}"',
            '',
            '[sheet]',
            f'width = "{self.sheet.width}"',
            f'height = "{self.sheet.height}"',
            '',
            '[popover]',
            f'width = "{self.popover.width}"',
            f'height = "{self.popover.height}"',
        ]

        config_path.write_text("\n".join(lines) + "\n")
