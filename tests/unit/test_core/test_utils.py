# SPDX-License-Identifier: LGPL-3.0-or-later
import hashlib
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from infinventory.core.exceptions import Fatal
from infinventory.core.utils import U


class TestUtilsFileOperations(unittest.TestCase):
    """Test utility file operations."""

    def test_ensure_dir_creates_directory(self):
        with tempfile.TemporaryDirectory() as td:
            new_dir = Path(td) / "subdir" / "nested"

            U.ensure_dir(new_dir)

            self.assertTrue(new_dir.is_dir())

    def test_ensure_dir_handles_existing(self):
        with tempfile.TemporaryDirectory() as td:
            U.ensure_dir(Path(td))
            self.assertTrue(Path(td).exists())

    def test_checksum_sha256(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "driver.cat"
            data = b"x" * (3 * 1024 * 1024 + 17)
            p.write_bytes(data)

            self.assertEqual(U.checksum(p), hashlib.sha256(data).hexdigest())

    def test_json_dump_sorted(self):
        self.assertEqual(U.json_dump({"b": 1, "a": Path("/x")}), '{\n  "a": "/x",\n  "b": 1\n}')


class TestUtilsCommandExecution(unittest.TestCase):
    """Test command execution utilities."""

    def setUp(self):
        self.logger = Mock()

    @patch("subprocess.run")
    def test_run_cmd_captures_output(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=["echo"], returncode=0, stdout="ok\n", stderr="")

        cp = U.run_cmd(self.logger, ["echo", "ok"], capture=True, timeout=3)

        self.assertEqual(cp.stdout, "ok\n")
        kwargs = mock_run.call_args[1]
        self.assertTrue(kwargs["capture_output"])
        self.assertEqual(kwargs["timeout"], 3)

    @patch("subprocess.run")
    def test_run_cmd_failure_reraised(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, ["false"], output="", stderr="boom")

        with self.assertRaises(subprocess.CalledProcessError):
            U.run_cmd(self.logger, ["false"])

    @patch("subprocess.run")
    def test_run_cmd_failure_fatal(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(4, ["false"])

        with self.assertRaises(Fatal) as ctx:
            U.run_cmd(self.logger, ["false"], fatal=True)
        self.assertEqual(ctx.exception.code, 4)

    @patch("subprocess.run")
    def test_run_cmd_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["sleep"], timeout=1)

        with self.assertRaises(subprocess.TimeoutExpired):
            U.run_cmd(self.logger, ["sleep", "9"], timeout=1)
        self.logger.warning.assert_called_once()

    def test_which_returns_none_for_missing(self):
        self.assertIsNone(U.which("definitely-not-a-real-command-xyz"))

    def test_die_logs_and_raises(self):
        with self.assertRaises(Fatal) as ctx:
            U.die(self.logger, "bad path", 2)
        self.assertEqual(ctx.exception.code, 2)
        self.logger.error.assert_called_once_with("bad path")
