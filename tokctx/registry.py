from __future__ import annotations

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import ConfigurationError
from .langs.profile import LanguageProfile

__all__ = [
    "register_lazy",
    "get_profile",
    "get_profile_for_path",
    "language_for_path",
    "list_languages",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    name: str
    extensions: Tuple[str, ...]
    attribute: str = "PROFILE"


# Lazy specs: language name -> where its profile lives
_LAZY_BY_NAME: Dict[str, _LazySpec] = {}

# Extension -> language name
_NAME_BY_EXT: Dict[str, str] = {}

# Resolved profiles by language name
_PROFILES: Dict[str, LanguageProfile] = {}


def register_lazy(*, module: str, name: str, extensions: List[str] | Tuple[str, ...], attribute: str = "PROFILE") -> None:
    """
    Register a language by module path without importing it.
    Grammar packages are only imported when the language is first resolved.
    """
    spec = _LazySpec(module=module, name=name, extensions=tuple(e.lower() for e in extensions), attribute=attribute)
    _LAZY_BY_NAME[name] = spec
    _PROFILES.pop(name, None)
    for ext in spec.extensions:
        _NAME_BY_EXT[ext] = name


def _load_profile(spec: _LazySpec) -> LanguageProfile:
    # Relative (".python") and absolute module names are both accepted.
    try:
        mod = importlib.import_module(spec.module, package="tokctx.langs")
    except ImportError as e:
        raise ConfigurationError(f"Cannot import language module '{spec.module}': {e}") from e
    profile = getattr(mod, spec.attribute, None)
    if profile is None:
        raise ConfigurationError(f"Language profile '{spec.attribute}' not found in {spec.module}")
    if not isinstance(profile, LanguageProfile):
        raise ConfigurationError(f"{spec.module}.{spec.attribute} is not a LanguageProfile")
    return profile


def get_profile(name: str) -> LanguageProfile:
    """
    Resolve a language profile by name.

    Raises:
        ConfigurationError: If the language is unknown or cannot be loaded
    """
    profile = _PROFILES.get(name)
    if profile is not None:
        return profile
    spec = _LAZY_BY_NAME.get(name)
    if spec is None:
        raise ConfigurationError(
            f"Unknown language: '{name}'. Supported: {', '.join(list_languages())}"
        )
    profile = _load_profile(spec)
    _PROFILES[name] = profile
    return profile


def language_for_path(path: Path | str) -> Optional[str]:
    """Language name registered for the file extension, or None."""
    return _NAME_BY_EXT.get(Path(path).suffix.lower())


def get_profile_for_path(path: Path | str) -> Optional[LanguageProfile]:
    name = language_for_path(path)
    return get_profile(name) if name is not None else None


def list_languages() -> List[str]:
    return sorted(_LAZY_BY_NAME)


# ---- Built-in languages -------------------------------------------------------
register_lazy(module=".python", name="python", extensions=[".py"])
register_lazy(module=".java", name="java", extensions=[".java"])
register_lazy(module=".cpp", name="cpp", extensions=[".cc", ".cpp", ".cxx", ".h", ".hh", ".hpp", ".hxx"])
