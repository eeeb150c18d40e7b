"""Library configuration for autoconnex."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from autoconnex._constants import DRAFT_STORAGE_KEY, LISTINGS_STORAGE_KEY, MAX_PHOTOS, MIN_PHOTOS
from autoconnex.exceptions import AutoConnexConfigError


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise AutoConnexConfigError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, value: str) -> float:
    try:
        return float(value.strip())
    except ValueError as exc:
        raise AutoConnexConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class AutoConnexConfig:
    """Store and lookup configuration.

    Parameters
    ----------
    draft_storage_key : str
        Storage key holding the single draft snapshot.
    listings_storage_key : str
        Storage key holding the published-listings collection.
    storage_path : str or None
        File used by :class:`autoconnex.storage.JsonFileStorage`.  ``None``
        means callers are expected to inject their own adapter.
    min_photos : int
        Minimum number of photos required before a draft can be published.
    max_photos : int
        Maximum number of photos a draft may hold.
    lookup_min_delay : float
        Lower bound (seconds) of the simulated latency of the mock
        registration lookup.
    lookup_max_delay : float
        Upper bound (seconds) of the simulated lookup latency.
    """

    draft_storage_key: str = DRAFT_STORAGE_KEY
    listings_storage_key: str = LISTINGS_STORAGE_KEY
    storage_path: str | None = None
    min_photos: int = MIN_PHOTOS
    max_photos: int = MAX_PHOTOS
    lookup_min_delay: float = 0.0
    lookup_max_delay: float = 0.0

    def __post_init__(self) -> None:
        if not self.draft_storage_key or not self.listings_storage_key:
            raise AutoConnexConfigError("storage keys must be non-empty")
        if self.draft_storage_key == self.listings_storage_key:
            raise AutoConnexConfigError("draft and listings storage keys must differ")
        if self.min_photos < 0 or self.max_photos < self.min_photos:
            raise AutoConnexConfigError(
                f"invalid photo limits: min_photos={self.min_photos}, max_photos={self.max_photos}"
            )
        if self.lookup_min_delay < 0 or self.lookup_max_delay < self.lookup_min_delay:
            raise AutoConnexConfigError(
                f"invalid lookup delay range: {self.lookup_min_delay}..{self.lookup_max_delay}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> AutoConnexConfig:
        """Create configuration from ``AUTOCONNEX_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AutoConnexConfig
            Populated configuration.

        Raises
        ------
        AutoConnexConfigError
            If a numeric variable cannot be parsed or the result is invalid.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "AUTOCONNEX_DRAFT_KEY": "draft_storage_key",
            "AUTOCONNEX_LISTINGS_KEY": "listings_storage_key",
            "AUTOCONNEX_STORAGE_PATH": "storage_path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in (
            ("AUTOCONNEX_MIN_PHOTOS", "min_photos"),
            ("AUTOCONNEX_MAX_PHOTOS", "max_photos"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        for env_key, field_name in (
            ("AUTOCONNEX_LOOKUP_MIN_DELAY", "lookup_min_delay"),
            ("AUTOCONNEX_LOOKUP_MAX_DELAY", "lookup_max_delay"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
