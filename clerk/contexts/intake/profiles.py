"""
Content selector profiles for known job sites.

A profile is plain data: an ordered list of CSS selectors for the job
description and another for the title. Profiles live in profiles.yaml and are
keyed by hostname. The extractor takes a profile as a parameter; unknown
sites simply have no profile and go straight to the fallback heuristic.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from omegaconf import OmegaConf

from clerk.contexts.intake.exceptions import InvalidProfileConfigError

load_dotenv()
DEFAULT_PROFILES_PATH = Path(__file__).parent / "profiles.yaml"
PROFILES_PATH = Path(os.getenv("CLERK_PROFILES_PATH", DEFAULT_PROFILES_PATH))


@dataclass(frozen=True)
class ContentSelectorProfile:
    """
    Static per-site extraction descriptor.

    Attributes:
        source_name: Display name of the site (e.g., "Indeed")
        description_selectors: CSS selectors for the description, in priority order
        title_selectors: CSS selectors for the job title, in priority order
    """

    source_name: str
    description_selectors: tuple = ()
    title_selectors: tuple = ()


class ProfileRegistry:
    """
    Registry for loading and caching selector profiles.

    Profiles are read once from a YAML file with a top-level `profiles` list;
    each entry has `hostname`, `name`, `description_selectors` and
    `title_selectors`.
    """

    def __init__(self, config_path: Path = None):
        """
        Initialize the profile registry.

        Args:
            config_path: YAML file with profile definitions. Defaults to
                         CLERK_PROFILES_PATH from environment, or the bundled profiles.yaml
        """
        if config_path is None:
            config_path = PROFILES_PATH

        self.config_path = Path(config_path)
        self._profiles: Optional[Dict[str, ContentSelectorProfile]] = None

    @property
    def profiles(self) -> Dict[str, ContentSelectorProfile]:
        """All profiles keyed by hostname, loaded on first access."""
        if self._profiles is None:
            self._profiles = self._load()
        return self._profiles

    def _load(self) -> Dict[str, ContentSelectorProfile]:
        if not self.config_path.exists():
            raise InvalidProfileConfigError(
                "Profile config not found", config_path=self.config_path
            )

        config = OmegaConf.to_container(OmegaConf.load(self.config_path), resolve=True)
        entries = config.get("profiles") if isinstance(config, dict) else None
        if not isinstance(entries, list):
            raise InvalidProfileConfigError(
                "Expected a top-level 'profiles' list", config_path=self.config_path
            )

        profiles = {}
        for entry in entries:
            hostname = entry.get("hostname") if isinstance(entry, dict) else None
            if not hostname:
                raise InvalidProfileConfigError(
                    "Profile entry missing 'hostname'", config_path=self.config_path
                )
            if not entry.get("description_selectors"):
                raise InvalidProfileConfigError(
                    "Profile has no description selectors",
                    config_path=self.config_path,
                    source_key=hostname,
                )

            profiles[hostname.lower()] = ContentSelectorProfile(
                source_name=entry.get("name") or hostname,
                description_selectors=tuple(entry["description_selectors"]),
                title_selectors=tuple(entry.get("title_selectors") or ()),
            )

        return profiles

    def get_profile(self, hostname: str) -> Optional[ContentSelectorProfile]:
        """
        Look up the profile for a hostname.

        Args:
            hostname: Exact hostname (e.g., "www.indeed.com"), case-insensitive

        Returns:
            ContentSelectorProfile, or None for unknown sites
        """
        return self.profiles.get((hostname or "").lower())

    def detect_profile(self, url: str) -> Optional[ContentSelectorProfile]:
        """Look up the profile for the hostname of a URL."""
        return self.get_profile(urlparse(url).hostname or "")

    def clear_cache(self):
        """Force profiles to be re-read on next access."""
        self._profiles = None


_default_registry = ProfileRegistry()


def get_profile(hostname: str) -> Optional[ContentSelectorProfile]:
    """Look up a bundled profile by hostname."""
    return _default_registry.get_profile(hostname)


def detect_profile(url: str) -> Optional[ContentSelectorProfile]:
    """Look up a bundled profile by page URL."""
    return _default_registry.detect_profile(url)
