"""Tests for free-text and URL sanitizers."""

import pytest
from pydantic import BaseModel, ValidationError

from src.cp_common.sanitize import SafeUrl, SanitizedStr, is_safe_url, strip_html


class _Form(BaseModel):
    name: SanitizedStr
    url: SafeUrl | None = None


class TestStripHtml:
    def test_removes_tags(self) -> None:
        assert strip_html("<b>Acme</b> Builders") == "Acme Builders"

    def test_removes_script_tag_markup(self) -> None:
        assert "<script>" not in strip_html("<script>alert(1)</script>Acme")

    def test_removes_event_handlers(self) -> None:
        assert "onclick" not in strip_html("x onclick=alert(1)")

    def test_removes_script_protocols(self) -> None:
        cleaned = strip_html("javascript:alert(1) data:text/html vbscript:x")
        assert "javascript:" not in cleaned
        assert "data:" not in cleaned
        assert "vbscript:" not in cleaned

    @pytest.mark.parametrize(
        "text", ["Metadata: Systems LLC", "Big data: analytics", "Vision: 2030"]
    )
    def test_words_ending_in_protocol_names_kept(self, text: str) -> None:
        assert strip_html(text) == text

    def test_strips_whitespace_and_nulls(self) -> None:
        assert strip_html("  Acme\x00 ") == "Acme"

    def test_plain_text_untouched(self) -> None:
        assert strip_html("Smith & Sons, LLC") == "Smith & Sons, LLC"


class TestSafeUrl:
    @pytest.mark.parametrize(
        "url", ["https://files.example.com/coi.pdf", "http://localhost:9000/x"]
    )
    def test_accepts_http(self, url: str) -> None:
        assert is_safe_url(url)

    @pytest.mark.parametrize(
        "url", ["javascript:alert(1)", "ftp://example.com/a", "/relative/path", "https://"]
    )
    def test_rejects_other(self, url: str) -> None:
        assert not is_safe_url(url)

    def test_schema_validation(self) -> None:
        form = _Form(name="<i>Acme</i>", url="https://example.com/a.pdf")
        assert form.name == "Acme"
        with pytest.raises(ValidationError):
            _Form(name="Acme", url="javascript:alert(1)")
