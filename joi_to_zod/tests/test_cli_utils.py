#!/usr/bin/env python3

from pathlib import Path

import pytest

from joi_to_zod.cli_utils import reconstruct_command_line


def get_click_command():
    """Helper to get Click command for testing"""
    try:
        from joi_to_zod.joi_to_zod import joi_to_zod

        return joi_to_zod
    except ImportError:
        return None


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        result = reconstruct_command_line(click_cmd)
        assert result == "joi_to_zod"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        """Arguments are shown by file name, flags only when set"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        describe = tmp_path / "schema.json"
        describe.write_text("{}")
        ctx = click_cmd.make_context("joi_to_zod", [str(describe), "--module", "--name", "user"])
        with ctx:
            result = reconstruct_command_line(click_cmd)

        assert result == "joi_to_zod schema.json --name user --module"

    def test_reconstruct_command_line_skips_defaults(self, tmp_path):
        """Options the user did not pass are left out, short forms are shown long"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        describe = tmp_path / "schema.json"
        describe.write_text("{}")
        ctx = click_cmd.make_context("joi_to_zod", ["-v", str(describe), "out.ts"])
        with ctx:
            result = reconstruct_command_line(click_cmd)

        assert result == "joi_to_zod schema.json " + str(Path("out.ts").resolve()) + " --verbose"


if __name__ == "__main__":
    pytest.main([__file__])
