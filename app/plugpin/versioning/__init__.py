"""Release channel classification."""

from plugpin.versioning.channels import (
    DEFAULT_CHANNEL,
    PRERELEASE_CHANNELS,
    extract_channel,
    is_dist_tag,
    is_prerelease_version,
)

__all__ = [
    "DEFAULT_CHANNEL",
    "PRERELEASE_CHANNELS",
    "extract_channel",
    "is_dist_tag",
    "is_prerelease_version",
]
