"""CLI behavior tests: output layouts, colorization and exit statuses.

Each test isolates the config path and ``LSCOLORS`` so the user's own
environment cannot leak into the expected output.
"""

from __future__ import annotations

import io
import os
import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lsview import cli, config
from lsview.errors import LinkResolutionError

SGR_RE = re.compile(r"\x1b\[[0-9;]*m")


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        self.config_path = self.root / "config" / "config.json"
        self.workdir = self.root / "work"
        self.workdir.mkdir()

        for patcher in (
            mock.patch("lsview.config.CONFIG_PATH", self.config_path),
            mock.patch.dict(os.environ, {}, clear=False),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)
        os.environ.pop("LSCOLORS", None)

    def run_cli(self, *argv: str) -> tuple[str, str, int]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        status = 0
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
            try:
                cli.main(list(argv))
            except SystemExit as exc:
                status = exc.code if isinstance(exc.code, int) else 1
                if isinstance(exc.code, str):
                    stderr.write(exc.code)
        return stdout.getvalue(), stderr.getvalue(), status


class CliLayoutTests(CliTestCase):
    def test_short_format_joins_names_on_one_line(self) -> None:
        for name in ("b.txt", "a.txt", ".hidden"):
            (self.workdir / name).write_text(name, encoding="utf-8")

        out, _err, status = self.run_cli(str(self.workdir))

        self.assertEqual(status, 0)
        self.assertEqual(out, "a.txt  b.txt\n")

    def test_one_per_line_with_hidden_entries(self) -> None:
        for name in ("b.txt", ".hidden"):
            (self.workdir / name).write_text(name, encoding="utf-8")

        out, _err, _status = self.run_cli("-1a", str(self.workdir))

        self.assertEqual(out, ".hidden\nb.txt\n")

    def test_long_human_format(self) -> None:
        report = self.workdir / "report.txt"
        report.write_bytes(b"x" * 14336)
        report.chmod(0o644)

        out, _err, status = self.run_cli("-lh", str(self.workdir))

        self.assertEqual(status, 0)
        self.assertRegex(out, r"^-rw-r--r-- 1 \S+ \S+ 14K [A-Z][a-z]{2} \d\d (\d\d:\d\d|\d{4}) report\.txt\n$")

    def test_empty_directory_prints_nothing(self) -> None:
        out, _err, status = self.run_cli(str(self.workdir))

        self.assertEqual((out, status), ("", 0))

    def test_files_before_directories_with_headers(self) -> None:
        single = self.root / "single.txt"
        single.write_text("1\n", encoding="utf-8")
        (self.workdir / "inside.txt").write_text("2\n", encoding="utf-8")

        out, _err, _status = self.run_cli("-1", str(self.workdir), str(single))

        self.assertEqual(out, f"{single}\n\n{self.workdir}:\ninside.txt\n")

    def test_help_prints_usage(self) -> None:
        out, _err, status = self.run_cli("--help")

        self.assertEqual(status, 0)
        self.assertIn("usage: lsview", out)
        self.assertIn("--lscolors", out)


class CliColorTests(CliTestCase):
    def test_color_uses_lscolors_environment(self) -> None:
        (self.workdir / "docs").mkdir()
        os.environ["LSCOLORS"] = "Gx"

        out, _err, _status = self.run_cli("--color", str(self.workdir))

        self.assertEqual(out, "\x1b[1;36mdocs\x1b[0m\n")

    def test_orphan_link_uses_configured_colors(self) -> None:
        config.save_config({"category_colors": {"link_orphan": "Bx", "link_orphan_target": "bx"}})
        os.symlink("missing", self.workdir / "link")

        out, _err, status = self.run_cli("-l", "--color", str(self.workdir))

        self.assertEqual(status, 0)
        self.assertIn("\x1b[1;31mlink\x1b[0m -> \x1b[0;31mmissing\x1b[0m", out)
        self.assertTrue(SGR_RE.sub("", out).rstrip("\n").endswith("link -> missing"))

    def test_save_lscolors_persists_flag_value(self) -> None:
        self.run_cli("--lscolors", "Cxfx", "--save-lscolors", str(self.workdir))

        self.assertEqual(config.load_lscolors(), "Cxfx")


class CliErrorTests(CliTestCase):
    def test_missing_target_exits_with_serious_status(self) -> None:
        out, err, status = self.run_cli(str(self.root / "nope"))

        self.assertEqual(out, "")
        self.assertEqual(status, cli.EXIT_SERIOUS)
        self.assertIn("No such file or directory", err)

    def test_entry_failure_is_reported_and_skipped(self) -> None:
        (self.workdir / "good.txt").write_text("ok\n", encoding="utf-8")
        (self.workdir / "bad.txt").write_text("no\n", encoding="utf-8")
        real_build = cli.build_listing

        def flaky_build(base_dir, entry, options, accounts):
            if entry.path == "bad.txt":
                raise LinkResolutionError(entry.path, "cannot read symbolic link: boom")
            return real_build(base_dir, entry, options, accounts)

        with mock.patch("lsview.cli.build_listing", side_effect=flaky_build):
            out, err, status = self.run_cli("-1", str(self.workdir))

        self.assertEqual(out, "good.txt\n")
        self.assertEqual(status, cli.EXIT_MINOR)
        self.assertIn(f"lsview: {self.workdir / 'bad.txt'}: cannot read symbolic link: boom", err)


if __name__ == "__main__":
    unittest.main()
