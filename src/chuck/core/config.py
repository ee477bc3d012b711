import tomllib
from dataclasses import dataclass
from pathlib import Path

from chuck.core.errors import ConfigError

CONFIG_FILENAME = ".chuckrc"


@dataclass(frozen=True)
class ChuckConfig:
    """In-memory representation of `.chuckrc`."""

    template_url: str


def load_chuck_config(repo_root: Path) -> ChuckConfig | None:
    """Load .chuckrc from the repository root if present.

    Example config:
      [template]
      url = "git@github.com:your-org/your-template.git"

    Returns:
        ChuckConfig, or None when the file does not exist

    Raises:
        ConfigError: If the file exists but is not valid TOML or lacks template.url
    """
    cfg_path = repo_root / CONFIG_FILENAME
    if not cfg_path.exists():
        return None

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(cfg_path, f"not valid TOML ({e})") from e

    template = data.get("template")
    if not isinstance(template, dict):
        raise ConfigError(cfg_path, "missing [template] section")

    url = template.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ConfigError(cfg_path, "missing url in [template] section")

    return ChuckConfig(template_url=url.strip())
