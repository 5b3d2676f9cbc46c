"""focusguard - validation and abuse-mitigation engine for untrusted video links."""

from focusguard.version import __version__

__all__ = ["__version__"]
