import unittest
from unittest.mock import patch

from s3nav.clipboard import copy_text
from s3nav.errors import ClipboardError

COMMANDS = [["wl-copy"], ["xclip", "-selection", "clipboard"]]


class TestClipboard(unittest.TestCase):
    def test_copies_with_first_available_tool(self) -> None:
        with patch("s3nav.clipboard.clipboard_commands", return_value=COMMANDS):
            with patch(
                "s3nav.clipboard.shutil.which",
                side_effect=lambda name: None if name == "wl-copy" else f"/usr/bin/{name}",
            ):
                with patch("s3nav.clipboard.subprocess.run") as run_mock:
                    run_mock.return_value.returncode = 0
                    copy_text("s3://data/b.txt")

        run_mock.assert_called_once_with(
            ["xclip", "-selection", "clipboard"],
            input="s3://data/b.txt",
            text=True,
            check=False,
        )

    def test_no_tool_raises(self) -> None:
        with patch("s3nav.clipboard.clipboard_commands", return_value=COMMANDS):
            with patch("s3nav.clipboard.shutil.which", return_value=None):
                with patch("s3nav.clipboard.subprocess.run") as run_mock:
                    with self.assertRaises(ClipboardError):
                        copy_text("s3://data/b.txt")
        run_mock.assert_not_called()

    def test_failing_tools_raise(self) -> None:
        with patch("s3nav.clipboard.clipboard_commands", return_value=COMMANDS):
            with patch("s3nav.clipboard.shutil.which", return_value="/usr/bin/tool"):
                with patch("s3nav.clipboard.subprocess.run") as run_mock:
                    run_mock.return_value.returncode = 1
                    with self.assertRaises(ClipboardError) as ctx:
                        copy_text("s3://data/b.txt")
        self.assertEqual(run_mock.call_count, 2)
        self.assertIn("wl-copy", str(ctx.exception))

    def test_os_error_falls_through_to_next_tool(self) -> None:
        with patch("s3nav.clipboard.clipboard_commands", return_value=COMMANDS):
            with patch("s3nav.clipboard.shutil.which", return_value="/usr/bin/tool"):
                with patch("s3nav.clipboard.subprocess.run") as run_mock:
                    ok = run_mock.return_value
                    ok.returncode = 0
                    run_mock.side_effect = [OSError("exec failed"), ok]
                    copy_text("s3://data/b.txt")
        self.assertEqual(run_mock.call_count, 2)


if __name__ == "__main__":
    unittest.main()
