import os
import subprocess
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SCRIPT = os.path.join(REPO_ROOT, "json_parser.py")


def _run(*args):
    return subprocess.run([sys.executable, SCRIPT, *args], capture_output=True, text=True)


def test_valid_file_prints_ok(tmp_path):
    path = tmp_path / "ok.json"
    path.write_text('{"a": [1, 2, 3]}', encoding="utf-8")
    cp = _run(str(path))
    assert cp.returncode == 0
    assert cp.stdout.strip() == "OK"


def test_print_flag_writes_value(tmp_path):
    path = tmp_path / "one.json"
    path.write_text('{"a":[1,2.5,true]}', encoding="utf-8")
    cp = _run(str(path), "--print")
    assert cp.returncode == 0
    assert cp.stdout == '{ "a" : [1, 2.5, true] }\n'


def test_syntax_error_exit_code_and_message(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"a" 1}', encoding="utf-8")
    cp = _run(str(path))
    assert cp.returncode == 1
    assert "MissingColon" in cp.stderr
    assert "offset 5" in cp.stderr


def test_max_depth_flag(tmp_path):
    path = tmp_path / "deep.json"
    path.write_text("[[[[1]]]]", encoding="utf-8")
    assert _run(str(path), "--max-depth", "4").returncode == 0
    cp = _run(str(path), "--max-depth", "3")
    assert cp.returncode == 1
    assert "NestingTooDeep" in cp.stderr


def test_unreadable_file_exit_code(tmp_path):
    cp = _run(str(tmp_path / "missing.json"))
    assert cp.returncode == 2
    assert "FileNotFoundError" in cp.stderr


def test_undecodable_file_exit_code(tmp_path):
    path = tmp_path / "latin.json"
    path.write_bytes(b'["\xff\xfe"]')
    cp = _run(str(path))
    assert cp.returncode == 2
    assert "UnicodeDecodeError" in cp.stderr
    assert "Traceback" not in cp.stderr
