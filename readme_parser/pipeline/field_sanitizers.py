"""Sanitizers for individual readme header values.

Each sanitizer takes one raw header value and returns the cleaned value.
Version headers are validated against a per-field rule; a value that does
not fit is dropped and reported with a warning flag instead of failing
the parse.

Real-world header values the rules are written for:
- "Requires at least: WordPress 5.0 or higher" -> "5.0"
- "Tested up to: WP 6.4-RC1" -> "6.4"
- "Stable tag: tags/1.2.3" -> "1.2.3"
- "License: GPLv2 - http://www.gnu.org/licenses/gpl-2.0.html" -> license
  "GPLv2", license URI "http://www.gnu.org/licenses/gpl-2.0.html"
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from readme_parser.schemas import ReadmeWarning

logger = logging.getLogger(__name__)

# x.y or x.y.z platform version
PLATFORM_VERSION_PATTERN = r"\d+\.\d(\.\d+)?"

# x.y or x.y.z PHP version, any number of digits per component
PHP_VERSION_PATTERN = r"\d+(\.\d+){1,2}"

# Leading major.minor of a version string, compared numerically
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?")

_URL_PATTERN = re.compile(r"(https?://\S+)", re.IGNORECASE)

_STABLE_TAG_PREFIX = re.compile(r"^/?tags/", re.IGNORECASE)
_STABLE_TAG_INVALID_CHARS = re.compile(r"[^a-z0-9_.-]", re.IGNORECASE)


@dataclass(frozen=True)
class VersionRule:
    """Validation rule for one version header."""

    field: str
    pattern: str
    warning: ReadmeWarning
    strip_phrases: tuple[str, ...] = ()
    strip_suffix: bool = True
    apply_ceiling: bool = True

    def compile(self) -> re.Pattern:
        """Compile the full-match pattern for this header."""
        return re.compile(self.pattern)


REQUIRES_RULE = VersionRule(
    field="requires",
    pattern=PLATFORM_VERSION_PATTERN,
    warning=ReadmeWarning.REQUIRES_HEADER_IGNORED,
    strip_phrases=("WordPress", "WP", "or higher", "and above", "+"),
)

TESTED_RULE = VersionRule(
    field="tested",
    pattern=PLATFORM_VERSION_PATTERN,
    warning=ReadmeWarning.TESTED_HEADER_IGNORED,
    strip_phrases=("WordPress", "WP"),
)

REQUIRES_PHP_RULE = VersionRule(
    field="requires_php",
    pattern=PHP_VERSION_PATTERN,
    warning=ReadmeWarning.REQUIRES_PHP_HEADER_IGNORED,
    strip_suffix=False,
    apply_ceiling=False,
)


def _leading_number(version: str) -> float:
    """Numeric value of a version's leading major.minor (0.0 if none)."""
    match = _LEADING_NUMBER.match(version.strip())
    return float(match.group(0)) if match else 0.0


def sanitize_version(
    value: str,
    rule: VersionRule,
    core_stable_branch: str | None = None,
) -> tuple[str, ReadmeWarning | None]:
    """Validate a version header value against a rule.

    Args:
        value: Raw header value.
        rule: The rule for this header.
        core_stable_branch: Host stable branch. Values newer than this
            branch + 0.1 are rejected (when the rule applies a ceiling).

    Returns:
        (version, warning). version is "" and warning is set when the value
        was present but unusable.
    """
    version = value.strip()
    if not version:
        return "", None

    for phrase in rule.strip_phrases:
        version = re.sub(re.escape(phrase), "", version, flags=re.IGNORECASE)
    version = version.strip()

    # -alpha, -beta, -RC1 suffixes are dropped before validation
    if rule.strip_suffix:
        version = version.split("-", 1)[0]

    valid = rule.compile().fullmatch(version) is not None
    if valid and rule.apply_ceiling and core_stable_branch:
        ceiling = _leading_number(core_stable_branch) + 0.1
        valid = _leading_number(version) <= ceiling

    if not valid:
        logger.info(f"Ignoring {rule.field} header value {value!r}")
        return "", rule.warning

    return version, None


def split_tags(value: str, ignore_tags: Iterable[str] = ()) -> list[str]:
    """Split a comma-separated Tags header, dropping blanks and ignored tags."""
    ignored = set(ignore_tags)
    tags = (tag.strip() for tag in value.split(","))
    return [tag for tag in tags if tag and tag not in ignored]


def split_contributors(value: str) -> list[str]:
    """Split a comma-separated Contributors header."""
    return [contributor.strip() for contributor in value.split(",")]


def sanitize_stable_tag(value: str) -> str:
    """Reduce a Stable tag header to a bare tag name."""
    stable_tag = value.strip().strip("\"'")
    stable_tag = _STABLE_TAG_PREFIX.sub("", stable_tag)
    stable_tag = _STABLE_TAG_INVALID_CHARS.sub("", stable_tag)

    # ".9" means "0.9"
    if stable_tag.startswith("."):
        stable_tag = f"0{stable_tag}"

    return stable_tag


def split_license(license: str, license_uri: str = "") -> tuple[str, str]:
    """Separate a URL embedded in the License header.

    Handles the common "License: GPLv2 - http://..." form. An explicit
    License URI header always wins.

    Returns:
        (license, license_uri)
    """
    if license_uri:
        return license, license_uri

    match = _URL_PATTERN.search(license)
    if not match:
        return license, license_uri

    url = match.group(1)
    license = license.replace(url, "").strip(" -*\t\n\r")
    return license, url
