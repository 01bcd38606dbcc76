"""Tests for parser settings."""

import pytest
from pydantic import ValidationError

from readme_parser.config import Settings


class TestSettings:
    """Tests for Settings defaults and environment loading."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "README_PARSER_IGNORE_TAGS",
            "README_PARSER_CORE_STABLE_BRANCH",
            "README_PARSER_SHORT_DESCRIPTION_LENGTH",
            "README_PARSER_MARKDOWN_EXTRAS",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self) -> None:
        config = Settings(_env_file=None)
        assert config.ignore_tags == []
        assert config.core_stable_branch is None
        assert config.short_description_length == 150
        assert "fenced-code-blocks" in config.markdown_extras

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("README_PARSER_IGNORE_TAGS", '["featured", "sticky"]')
        monkeypatch.setenv("README_PARSER_CORE_STABLE_BRANCH", "6.4")
        monkeypatch.setenv("README_PARSER_SHORT_DESCRIPTION_LENGTH", "80")

        config = Settings(_env_file=None)
        assert config.ignore_tags == ["featured", "sticky"]
        assert config.core_stable_branch == "6.4"
        assert config.short_description_length == 80

    def test_length_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, short_description_length=0)
