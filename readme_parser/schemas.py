"""Pydantic schemas for parsed readme metadata.

These schemas are the output contract of the parser and are used for data
transfer to downstream rendering and validation tooling.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Boilerplate shipped in the default readme.txt template. An installation
# section containing it carries no project-specific instructions.
DEFAULT_INSTALLATION_PHRASES = (
    "This section describes how to install the plugin and get it working.",
)


class ReadmeWarning(StrEnum):
    """Soft validation failures raised while parsing header fields."""

    REQUIRES_HEADER_IGNORED = "requires_header_ignored"
    TESTED_HEADER_IGNORED = "tested_header_ignored"
    REQUIRES_PHP_HEADER_IGNORED = "requires_php_header_ignored"


class ParsedReadme(BaseModel):
    """Normalized metadata extracted from a theme/plugin readme.

    Attributes:
        name: Document title. None when a placeholder title was found and no
            usable replacement followed it.
        tags: Tags in the order they were declared.
        requires: Minimum platform version, or "" if absent/invalid.
        tested: Highest tested platform version, or "" if absent/invalid.
        requires_php: Minimum PHP version, or "" if absent/invalid.
        stable_tag: Sanitized stable tag, or "".
        contributors: Contributor handles in declared order.
        donate_link: Donation URL as written.
        license: License name with any embedded URL removed.
        license_uri: License URL.
        resources: Raw value of the Resources header.
        short_description: Plain-text summary, truncated to the configured length.
        sections: Section key to sanitized HTML.
        upgrade_notice: Version label to sanitized HTML.
        faq: Question to sanitized HTML answer.
        warnings: Flags for header values that were ignored.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field("", description="Document title")
    tags: list[str] = Field(default_factory=list, description="Declared tags")
    requires: str = Field("", description="Requires at least version")
    tested: str = Field("", description="Tested up to version")
    requires_php: str = Field("", description="Requires PHP version")
    stable_tag: str = Field("", description="Stable tag")
    contributors: list[str] = Field(default_factory=list, description="Contributors")
    donate_link: str = Field("", description="Donate link")
    license: str = Field("", description="License name")
    license_uri: str = Field("", description="License URI")
    resources: str = Field("", description="Resources header value")
    short_description: str = Field("", description="Plain-text short description")
    sections: dict[str, str] = Field(
        default_factory=dict, description="Section key to HTML content"
    )
    upgrade_notice: dict[str, str] = Field(
        default_factory=dict, description="Version label to HTML notice"
    )
    faq: dict[str, str] = Field(
        default_factory=dict, description="Question to HTML answer"
    )
    warnings: frozenset[ReadmeWarning] = Field(
        default_factory=frozenset, description="Ignored header flags"
    )

    def has_warning(self, flag: ReadmeWarning | str) -> bool:
        """Return True if the given warning flag was raised during parsing."""
        return ReadmeWarning(flag) in self.warnings

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_unique_installation_instructions(self) -> bool:
        """Whether the installation section differs from the template default."""
        installation = self.sections.get("installation")
        if not installation:
            return False

        lowered = installation.lower()
        return not any(
            phrase.lower() in lowered for phrase in DEFAULT_INSTALLATION_PHRASES
        )
