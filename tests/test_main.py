"""
Tests for main.py (command line driver)
"""

import io
import json
import logging
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlschema.log import logger
from sqlschema.main import main

DUMP = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data', 'table_schema.sql')


@pytest.fixture
def broken_dump(tmp_path):
    path = tmp_path / "broken.sql"
    path.write_text(
        "CREATE TABLE `a` (`id` int NOT NULL);\n"
        "CREATE TABLE `b` (`id` int NOT NUL);\n"
    )
    return str(path)


def test_list_tables(capsys):
    assert main([DUMP]) == 0
    out = capsys.readouterr().out
    assert "country" in out
    assert "city" in out
    assert "(3 tables)" in out


def test_describe_table(capsys):
    assert main([DUMP, '--table', 'user']) == 0
    out = capsys.readouterr().out
    assert out.startswith("Table: user")
    assert "FK5A735BAA2351BFBE (country_id) REFERENCES country (id)" in out


def test_describe_all(capsys):
    assert main([DUMP, '--all']) == 0
    assert capsys.readouterr().out.count("Table: ") == 3


def test_json_output(capsys):
    assert main([DUMP, '--format', 'json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert list(data) == ['country', 'city', 'user']
    assert data['user']['columns']['id']['auto_increment'] is True
    assert data['city']['constraints']['country_id']['table_name'] == 'country'


def test_json_single_table(capsys):
    assert main([DUMP, '--format', 'json', '-t', 'city']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['name'] == 'city'


def test_tokens(capsys):
    assert main([DUMP, '--tokens']) == 0
    out = capsys.readouterr().out
    assert "CREATE" in out
    assert out.rstrip().splitlines()[-1].split()[1] == 'EOF'


def test_reads_stdin(capsys, monkeypatch):
    monkeypatch.setattr(sys, 'stdin', io.StringIO("CREATE TABLE t (id int);"))
    assert main([]) == 0
    assert "(1 table)" in capsys.readouterr().out


def test_parse_error(capsys, broken_dump):
    assert main([broken_dump]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: found 'NUL', expected NULL")
    assert captured.out == ""


def test_parse_error_partial(capsys, broken_dump):
    assert main([broken_dump, '--partial']) == 1
    out = capsys.readouterr().out
    assert "(1 table)" in out


def test_missing_file(capsys, tmp_path):
    assert main([str(tmp_path / "missing.sql")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_unknown_table(capsys):
    assert main([DUMP, '--table', 'nope']) == 1
    assert "Table 'nope' does not exist" in capsys.readouterr().err


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "logs" / "sqlschema.log"
    assert main([DUMP, '--verbose', '--log-file', str(log_file)]) == 0
    content = log_file.read_text()
    assert "Parsed table user" in content
    assert "Skipping DROP statement" in content


def test_bad_format():
    with pytest.raises(SystemExit) as exc:
        main([DUMP, '--format', 'xml'])
    assert exc.value.code == 2


def test_invalid_utf8(capsys, tmp_path):
    path = tmp_path / "latin1.sql"
    path.write_bytes(b"CREATE TABLE `t` (`name` varchar(20) COMMENT '\xff\xfe');\n")
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith(f"Error: {path}: ")
    assert "can't decode" in captured.err


def test_encoding_option(capsys, tmp_path):
    path = tmp_path / "latin1.sql"
    path.write_bytes(b"CREATE TABLE `t` (`name` varchar(20) COMMENT '\xe9t\xe9');\n")
    assert main([str(path), '--encoding', 'latin-1', '--format', 'json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['t']['columns']['name']['comment'] == "été"


def test_unknown_log_level(capsys, monkeypatch):
    monkeypatch.setattr('sqlschema.log.LOG_LEVEL', 'verbose')
    assert main([DUMP]) == 0
    assert logger.level == logging.WARNING
    assert "(3 tables)" in capsys.readouterr().out
