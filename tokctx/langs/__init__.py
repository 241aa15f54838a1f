# Language modules are imported lazily through tokctx.registry, so this
# package only exposes the profile type.
from .profile import LanguageProfile

__all__ = ["LanguageProfile"]
