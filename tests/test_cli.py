import io
import json
import subprocess
import sys
from pathlib import Path

import pytest

from bfi.__main__ import main


def write_program(tmp_path, source, name='prog.bf'):
    path = tmp_path / name
    path.write_text(source, encoding='latin-1')
    return path


def test_runs_program_file(tmp_path, capsys):
    path = write_program(tmp_path, '+' * 72 + '.+.')
    main([str(path)])
    captured = capsys.readouterr()
    assert captured.out == 'HI'
    assert captured.err == ''


def test_bounds_fault_exits_with_position(tmp_path, capsys):
    source = 'move\n>>>'
    path = write_program(tmp_path, source)
    with pytest.raises(SystemExit) as excinfo:
        main(['-m', '3', str(path)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert 'bf: warning: memory capacity is set to less than 2KB' in err
    assert f'bf: error at character position {len(source) - 1}: memory overflow' in err


def test_unbalanced_program_exits(tmp_path, capsys):
    path = write_program(tmp_path, '[[-]')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == 'bf: error: unmatched braces in program\n'


def test_missing_file(tmp_path, capsys):
    missing = tmp_path / 'nope.bf'
    with pytest.raises(SystemExit) as excinfo:
        main([str(missing)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == f"bf: error: couldn't open file {missing}.\n"


@pytest.mark.parametrize('value', ['abc', '-5', '0'])
def test_bad_memory_value(value, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['-m', value, 'prog.bf'])
    assert excinfo.value.code == 2


def test_default_memory_has_no_warning(tmp_path, capsys):
    path = write_program(tmp_path, '+')
    main(['-m', '4096', str(path)])
    assert capsys.readouterr().err == ''


def test_emit_and_run_ops(tmp_path, capsys):
    path = write_program(tmp_path, 'hi ' + '+' * 72 + '.+.')
    main(['--emit-ops', str(path)])
    out_path = tmp_path / 'prog.bf.ops.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data['ops'][0] == {"kind": "Add", "repeat": 72, "position": 74}

    main(['--ops', str(out_path)])
    assert capsys.readouterr().out == 'HI'


def test_invalid_ops_file(tmp_path, capsys):
    path = tmp_path / 'bad.json'
    path.write_text('{"ops": [{"kind": "Jump"}]}', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main(['--ops', str(path)])
    assert excinfo.value.code == 1
    assert 'invalid operations file' in capsys.readouterr().err


def test_no_program_starts_session(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('+' * 65 + '.\nR\nQ\n'))
    main([])
    out = capsys.readouterr().out
    assert out.startswith('bf repl\n')
    assert 'RUN\nA\nEND\n\n' in out
    assert out.endswith('QUIT\n')


def test_program_input_is_raw_bytes(tmp_path):
    path = write_program(tmp_path, ',.,.')
    root = Path(__file__).resolve().parent.parent
    result = subprocess.run([sys.executable, '-m', 'bfi', str(path)], input=b'\xff\x00',
                            capture_output=True, cwd=root)
    assert result.returncode == 0, result.stderr
    assert result.stdout == b'\xff\x00'


def test_session_input_shares_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO(',.\nR\nZ\nQ\n'))
    main([])
    assert 'RUN\nZ\nEND\n\n' in capsys.readouterr().out
