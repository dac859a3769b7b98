"""
Base classes for credential management.

Contains CredentialSpec, CredentialManager and CredentialError. Specs themselves
are declared per service (twitterapi.py) and merged in the package __init__.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import dotenv_values


@dataclass
class CredentialSpec:
    """Specification for a single credential."""

    env_var: str
    """Environment variable name (e.g., 'TWITTERAPI_API_KEY')"""

    tools: List[str] = field(default_factory=list)
    """Tool names that use this credential"""

    required: bool = True
    """Whether the tools are expected to fail without it"""

    help_url: str = ""

    description: str = ""


class CredentialError(Exception):
    """Raised when required credentials are missing."""
    pass


class CredentialManager:
    """
    Resolves credentials by logical name.

    Lookup order is test overrides, then os.environ, then a .env file that is
    re-read on every lookup so edits apply without a restart.
    """

    def __init__(
        self,
        specs: Optional[Dict[str, CredentialSpec]] = None,
        _overrides: Optional[Dict[str, str]] = None,
        dotenv_path: Optional[Path] = None,
    ):
        if specs is None:
            from . import CREDENTIAL_SPECS

            specs = CREDENTIAL_SPECS

        self._specs = specs
        self._overrides = _overrides or {}
        self._dotenv_path = dotenv_path

    @classmethod
    def for_testing(
        cls,
        overrides: Dict[str, str],
        specs: Optional[Dict[str, CredentialSpec]] = None,
        dotenv_path: Optional[Path] = None,
    ) -> "CredentialManager":
        """Create a CredentialManager with test values."""
        return cls(specs=specs, _overrides=overrides, dotenv_path=dotenv_path)

    def get(self, name: str) -> Optional[str]:
        """Get a credential value by logical name, or None if it is not set."""
        if name not in self._specs:
            raise KeyError(
                f"Unknown credential '{name}'. Available: {list(self._specs.keys())}"
            )
        if name in self._overrides:
            return self._overrides[name]

        env_var = self._specs[name].env_var
        return os.environ.get(env_var) or self._read_from_dotenv(env_var)

    def _read_from_dotenv(self, env_var: str) -> Optional[str]:
        """Read a single env var from .env file without mutating os.environ."""
        dotenv_path = self._dotenv_path or Path.cwd() / ".env"
        if not dotenv_path.exists():
            return None

        return dotenv_values(dotenv_path).get(env_var)

    def is_available(self, name: str) -> bool:
        """Check if a credential is available (set and non-empty)."""
        return bool(self.get(name))

    def get_missing_for_tools(
        self, tool_names: List[str]
    ) -> List[Tuple[str, CredentialSpec]]:
        """Get the required credentials that the given tools use but are not set."""
        missing: List[Tuple[str, CredentialSpec]] = []
        for cred_name, spec in self._specs.items():
            if not spec.required or not set(spec.tools) & set(tool_names):
                continue
            if not self.is_available(cred_name):
                missing.append((cred_name, spec))
        return missing

    def validate_for_tools(self, tool_names: List[str]) -> None:
        """Raise CredentialError if any credential the tools need is missing."""
        missing = self.get_missing_for_tools(tool_names)
        if missing:
            raise CredentialError(self._format_missing_error(missing, tool_names))

    def _format_missing_error(
        self,
        missing: List[Tuple[str, CredentialSpec]],
        tool_names: List[str],
    ) -> str:
        lines = ["Missing credentials for registered tools:"]

        for _, spec in missing:
            affected = [t for t in tool_names if t in spec.tools]
            lines.append(f"  {spec.env_var} environment variable not set")
            lines.append(f"    Used by: {', '.join(affected)}")
            if spec.description:
                lines.append(f"    {spec.description}")
            if spec.help_url:
                lines.append(f"    Get an API key at: {spec.help_url}")

        lines.append("Requests will be sent without it and may be rejected upstream.")
        return "\n".join(lines)
