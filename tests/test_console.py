"""Tests for console.py module."""

from fluxcli import console


class TestConsoleOutput:
    """Tests for styled output helpers."""

    def test_success(self, capsys):
        """Test that success messages carry the check mark."""
        console.success("Flux installed")

        assert "✓ Flux installed" in capsys.readouterr().out

    def test_error(self, capsys):
        """Test that error messages carry the cross mark."""
        console.error("Failed to install flux: boom")

        assert "✗ Failed to install flux: boom" in capsys.readouterr().out

    def test_highlight(self):
        """Test that highlight wraps text in the theme markup."""
        assert console.highlight("podinfo") == "[highlight]podinfo[/highlight]"

    def test_theme_styles(self):
        """Test that the theme only defines the styles the helpers use."""
        for style in ("info", "success", "error", "highlight"):
            assert console.console.get_style(style)
