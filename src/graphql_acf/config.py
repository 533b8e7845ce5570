"""
Settings for the schema augmenter.

Settings are a frozen pydantic model with defaults that can be overridden
at construction time or read from the environment:

    GRAPHQL_ACF_MAX_DEPTH           Maximum composite nesting depth (default 10)
    GRAPHQL_ACF_FIELD_DESCRIPTION   Description for fields without instructions
    GRAPHQL_ACF_NO_STRIP            Extra characters kept when normalizing names

Usage:
    from graphql_acf.config import AugmenterSettings

    settings = AugmenterSettings.from_env()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MAX_DEPTH_ENV_VAR = "GRAPHQL_ACF_MAX_DEPTH"
FIELD_DESCRIPTION_ENV_VAR = "GRAPHQL_ACF_FIELD_DESCRIPTION"
NO_STRIP_ENV_VAR = "GRAPHQL_ACF_NO_STRIP"

DEFAULT_FIELD_DESCRIPTION = "ACF Field added to the Schema by WPGraphQL ACF"


class AugmenterSettings(BaseModel):
    """Tuneable parameters for a schema augmentation pass."""

    max_depth: int = Field(
        default=10,
        ge=0,
        description="Maximum nesting depth followed for group and repeater fields",
    )
    default_field_description: str = Field(
        default=DEFAULT_FIELD_DESCRIPTION,
        description="Description used when a field has no instructions",
    )
    field_group_description: str = Field(
        default="Field Group",
        description="Description of generated group and repeater types",
    )
    google_map_description: str = Field(
        default="Google Map field",
        description="Description of the generated ACFGoogleMap type",
    )
    no_strip: tuple[str, ...] = Field(
        default=(),
        description="Extra characters kept when normalizing field names",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AugmenterSettings:
        """
        Build settings from environment variables.

        Unset variables keep their defaults; invalid values are logged and
        ignored.

        Args:
            environ: Mapping to read from (default: ``os.environ``)
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        raw_depth = env.get(MAX_DEPTH_ENV_VAR, "").strip()
        if raw_depth:
            try:
                depth = int(raw_depth)
            except ValueError:
                depth = -1
            if depth >= 0:
                overrides["max_depth"] = depth
            else:
                logger.warning(
                    "Ignoring invalid %s=%r (expected a non-negative integer)",
                    MAX_DEPTH_ENV_VAR,
                    raw_depth,
                )

        description = env.get(FIELD_DESCRIPTION_ENV_VAR, "").strip()
        if description:
            overrides["default_field_description"] = description

        no_strip = env.get(NO_STRIP_ENV_VAR, "")
        if no_strip:
            overrides["no_strip"] = tuple(dict.fromkeys(no_strip.replace(" ", "")))

        return cls(**overrides)
