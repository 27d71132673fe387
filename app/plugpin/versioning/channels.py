"""Map a version token to the release channel it belongs to.

Follows npm dist-tag conventions: ``1.2.3`` is on ``latest``,
``1.2.3-beta.4`` is on ``beta``, and a non-numeric token such as ``canary``
is a dist-tag and therefore its own channel.
"""

import re

DEFAULT_CHANNEL = "latest"

# Known prerelease identifiers, matched as a prefix of the prerelease part.
PRERELEASE_CHANNELS: tuple[str, ...] = ("alpha", "beta", "rc", "canary", "next")

_CHANNEL_RE = re.compile(r"^(" + "|".join(PRERELEASE_CHANNELS) + r")")
_VERSION_START_RE = re.compile(r"[0-9]")


def is_dist_tag(version: str) -> bool:
    """Check whether ``version`` is a dist-tag rather than a version number.

    Only an ASCII digit starts a version number.
    """
    return _VERSION_START_RE.match(version) is None


def is_prerelease_version(version: str) -> bool:
    """Check whether ``version`` carries a prerelease suffix."""
    return "-" in version


def extract_channel(version: str | None) -> str:
    """Classify a version token into a release channel.

    Args:
        version: A semver-like version, a dist-tag, or None.

    Returns:
        The channel name. Unknown prerelease identifiers and plain releases
        map to ``"latest"``.
    """
    if not version:
        return DEFAULT_CHANNEL

    if is_dist_tag(version):
        return version

    if is_prerelease_version(version):
        prerelease = version.split("-", 1)[1]
        match = _CHANNEL_RE.match(prerelease)
        if match:
            return match.group(1)

    return DEFAULT_CHANNEL
