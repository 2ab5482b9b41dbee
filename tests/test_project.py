"""Tests for the command line front end."""

import io
import json

from project import main


def test_json_output_for_sample(capsys):
    assert main(['--sample', '--json', '-l', 'cpp']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['language'] == 'cpp'
    assert data['errors'] == []
    assert any(e['lexeme'] == 'main' for e in data['symbol_table'])


def test_reads_file(tmp_path, capsys):
    source = tmp_path / 'Example.java'
    source.write_text('int total = a + b;\nif (total > 3) { total = 0; }\n', encoding='utf-8')
    assert main([str(source)]) == 0
    out = capsys.readouterr().out
    assert 'Three-Address Code' in out
    assert 't1 = a + b' in out
    assert 'if_false total > 3 goto L1' in out
    assert 'Found 19 tokens, 0 invalid.' in out


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('x = y;'))
    assert main(['--json']) == 0
    assert json.loads(capsys.readouterr().out)['tac'] == ['x = y']


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'nope.java')]) == 2
    assert 'File not found' in capsys.readouterr().out
