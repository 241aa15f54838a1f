"""
Settings model: which base tokenizer, output format and parse strictness
each language uses.

The settings file is optional; without it every language runs with the
defaults of its profile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigurationError

__all__ = ["LanguageSettings", "Settings", "load_settings", "SETTINGS_FILE"]

_yaml = YAML(typ="safe")

SETTINGS_FILE = "tokctx.yaml"


def _expect(value: Any, kind: type, where: str) -> Any:
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise ConfigurationError(f"{where}: expected {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass
class LanguageSettings:
    """Per-language overrides. None means "use the profile default"."""
    tokenizer: Optional[str] = None          # base tokenizer name from the profile
    format: Optional[str] = None             # compact | braced
    tokenize_comments: Optional[bool] = None
    strict: bool = True                      # reject trees with syntax errors

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], where: str = "language") -> LanguageSettings:
        """Load settings from a YAML mapping."""
        if d is None:
            return LanguageSettings()
        if not isinstance(d, dict):
            raise ConfigurationError(f"{where}: must be a mapping")

        unknown = set(d) - {"tokenizer", "format", "tokenize_comments", "strict"}
        if unknown:
            raise ConfigurationError(f"{where}: unknown keys {sorted(unknown)}")

        cfg = LanguageSettings()
        if d.get("tokenizer") is not None:
            cfg.tokenizer = _expect(d["tokenizer"], str, f"{where}.tokenizer")
        if d.get("format") is not None:
            cfg.format = _expect(d["format"], str, f"{where}.format")
        if d.get("tokenize_comments") is not None:
            cfg.tokenize_comments = _expect(d["tokenize_comments"], bool, f"{where}.tokenize_comments")
        if d.get("strict") is not None:
            cfg.strict = _expect(d["strict"], bool, f"{where}.strict")
        return cfg

    def tokenizer_options(self) -> Dict[str, Any]:
        """Keyword arguments for the base tokenizer factory."""
        options: Dict[str, Any] = {}
        if self.tokenize_comments is not None:
            options["tokenize_comments"] = self.tokenize_comments
        return options


@dataclass
class Settings:
    languages: Dict[str, LanguageSettings] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Settings:
        if d is None:
            return Settings()
        if not isinstance(d, dict):
            raise ConfigurationError("settings must be a mapping with key: languages")

        unknown = set(d) - {"languages"}
        if unknown:
            raise ConfigurationError(f"settings: unknown keys {sorted(unknown)}")

        langs_node = d.get("languages")
        if langs_node is None:
            langs_node = {}
        if not isinstance(langs_node, dict):
            raise ConfigurationError("languages: must be a mapping")

        languages = {
            str(name): LanguageSettings.from_dict(node, where=f"languages.{name}")
            for name, node in langs_node.items()
        }
        return Settings(languages=languages)

    def for_language(self, name: str) -> LanguageSettings:
        return self.languages.get(name) or LanguageSettings()


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Settings file; defaults to ./tokctx.yaml

    Returns:
        Parsed settings, or defaults when ./tokctx.yaml does not exist

    Raises:
        ConfigurationError: If an explicit file is missing, is not valid YAML
            or violates the schema
    """
    if path is None:
        p = Path.cwd() / SETTINGS_FILE
        if not p.is_file():
            return Settings()
    else:
        p = path
        if not p.is_file():
            raise ConfigurationError(f"Settings file not found: {p}")
    try:
        raw = _yaml.load(p.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigurationError(f"{p}: invalid YAML: {e}") from e
    return Settings.from_dict(raw)
