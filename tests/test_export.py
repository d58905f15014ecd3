"""Tests for plain-text draft export."""

from app.lc_drafter.services.export import (
    DEFAULT_EXPORT_FILENAME,
    UCP_600_FOOTER,
    format_draft_for_export,
    is_section_header,
    sanitize_export_filename,
)


class TestFormatDraftForExport:
    """Tests for format_draft_for_export."""

    def test_tag_lines_kept_and_blank_lines_dropped(self):
        """Test MT700 lines are kept as-is and blank lines removed."""
        result = format_draft_for_export(":27:1/1\n\n  :20:ABC  \n")
        assert result == ":27:1/1\n:20:ABC\n\n\n" + UCP_600_FOOTER

    def test_section_header_underlined(self):
        """Test header lines are spaced and underlined."""
        header = "DOCUMENTS REQUIRED:"
        result = format_draft_for_export(f"{header}\n1. INVOICE")
        assert result.startswith(f"\n{header}\n{'=' * len(header)}\n1. INVOICE\n")

    def test_footer_appended(self):
        """Test the UCP 600 footer closes every export."""
        result = format_draft_for_export(":27:1/1")
        assert result.endswith("ICC Publication No. 600\n")
        assert "-" * 40 in result


class TestSectionHeaders:
    """Tests for header detection."""

    def test_tag_lines_are_not_headers(self):
        """Test tag lines ending in ':' are not treated as headers."""
        assert not is_section_header(":47A:")
        assert not is_section_header(":72Z:THIS CREDIT IS SUBJECT TO UCP 600")

    def test_headers(self):
        """Test all-caps and colon-terminated lines are headers."""
        assert is_section_header("ADDITIONAL CONDITIONS")
        assert is_section_header("Beneficiary:")
        assert not is_section_header("1. COMMERCIAL INVOICE")


class TestSanitizeExportFilename:
    """Tests for download file names."""

    def test_default(self):
        """Test missing names use the default."""
        assert sanitize_export_filename(None) == DEFAULT_EXPORT_FILENAME
        assert sanitize_export_filename("  ") == DEFAULT_EXPORT_FILENAME

    def test_unsafe_characters_replaced(self):
        """Test unsafe characters are replaced and .txt is enforced."""
        assert sanitize_export_filename("my draft") == "my_draft.txt"
        assert sanitize_export_filename("../../etc/passwd") == "etc_passwd.txt"
        assert sanitize_export_filename("LC-2025.txt") == "LC-2025.txt"
