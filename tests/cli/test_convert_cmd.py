"""
Tests for the CLI 'convert' command (whole-module mode).

Verifies that:
1. A module file is folded declaration by declaration.
2. Directory input is mirrored under the output directory.
3. Unparseable files fail the batch without stopping it.
"""

from unittest.mock import patch

from remove_async_await.cli.__main__ import main

MODULE_SRC = """import asyncio

TIMEOUT = 3


async def fetch(url):
    return await asyncio.sleep(TIMEOUT, url)


class Client:
    async def get(self, url):
        async with self.session:
            return await fetch(url)

    def close(self):
        pass
"""

MODULE_SYNC = """import asyncio

TIMEOUT = 3


def fetch(url):
    return asyncio.sleep(TIMEOUT, url)


class Client:
    def get(self, url):
        with self.session:
            return fetch(url)

    def close(self):
        pass
"""


@patch("remove_async_await.cli.commands.handle_convert")
def test_convert_argument_dispatch(mock_handle, tmp_path):
  main(["convert", str(tmp_path), "--out", str(tmp_path / "out"), "--debug"])

  mock_handle.assert_called_once_with(tmp_path, tmp_path / "out", True)


def test_convert_single_file_to_stdout(tmp_path, capsys):
  src = tmp_path / "client.py"
  src.write_text(MODULE_SRC, encoding="utf-8")

  ret = main(["convert", str(src)])

  assert ret == 0
  assert capsys.readouterr().out.startswith(MODULE_SYNC)


def test_convert_single_file_to_file(tmp_path):
  src = tmp_path / "client.py"
  src.write_text(MODULE_SRC, encoding="utf-8")
  out = tmp_path / "client_sync.py"

  ret = main(["convert", str(src), "--out", str(out)])

  assert ret == 0
  assert out.read_text(encoding="utf-8") == MODULE_SYNC


def test_recursive_directory_mirroring(tmp_path):
  in_root = tmp_path / "src"
  (in_root / "pkg").mkdir(parents=True)
  (in_root / "main.py").write_text("async def main():\n    await run()\n", encoding="utf-8")
  (in_root / "pkg" / "io.py").write_text("async def read(f):\n    return await f.read()\n", encoding="utf-8")
  out_root = tmp_path / "dst"

  ret = main(["convert", str(in_root), "--out", str(out_root)])

  assert ret == 0
  assert (out_root / "main.py").read_text(encoding="utf-8") == "def main():\n    run()\n"
  assert (out_root / "pkg" / "io.py").read_text(encoding="utf-8") == "def read(f):\n    return f.read()\n"


def test_directory_requires_out(tmp_path, recording_console):
  (tmp_path / "a.py").write_text("x = 1\n", encoding="utf-8")

  assert main(["convert", str(tmp_path)]) == 1
  assert "requires --out" in recording_console.export_text()


def test_empty_directory_warns(tmp_path, recording_console):
  ret = main(["convert", str(tmp_path), "--out", str(tmp_path / "out")])

  assert ret == 0
  assert "No .py files found" in recording_console.export_text()


def test_parse_failure_is_reported_and_batch_continues(tmp_path, recording_console):
  in_root = tmp_path / "src"
  in_root.mkdir()
  (in_root / "bad.py").write_text("async def broken(:\n", encoding="utf-8")
  (in_root / "good.py").write_text("async def ok():\n    return 1\n", encoding="utf-8")
  out_root = tmp_path / "dst"

  ret = main(["convert", str(in_root), "--out", str(out_root)])

  assert ret == 1
  assert not (out_root / "bad.py").exists()
  assert (out_root / "good.py").read_text(encoding="utf-8") == "def ok():\n    return 1\n"

  report = recording_console.export_text()
  assert "Conversion Report" in report
  assert "bad.py" in report
  assert "Parse Error" in report


def test_missing_input(tmp_path, recording_console):
  assert main(["convert", str(tmp_path / "missing")]) == 1
  assert "Input not found" in recording_console.export_text()
