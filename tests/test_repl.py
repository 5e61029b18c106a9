import io

import pytest

from bfi.repl import BANNER, Repl


def session(text, capacity=2000):
    stdin = io.StringIO(text)
    stdout = io.BytesIO()
    stderr = io.StringIO()
    repl = Repl(capacity, stdin=stdin, stdout=stdout, stderr=stderr)
    status = repl.run()
    return repl, status, stdout.getvalue().decode('latin-1'), stderr.getvalue()


def test_run_accumulated_lines():
    _, status, out, err = session('+' * 40 + '\n' + '+' * 25 + '\n.\nR\nQ\n')
    assert status == 0
    assert out == BANNER + 'RUN\nA\nEND\n\nQUIT\n'
    assert err == ''


def test_buffer_is_kept_after_run():
    repl, _, out, _ = session('+' * 66 + '.\nR\n+.\nR\nQ\n')
    assert out == BANNER + 'RUN\nB\nEND\n\nRUN\nBC\nEND\n\nQUIT\n'
    assert repl.source == '+' * 66 + '.+.'


def test_clear_discards_source():
    repl, _, out, _ = session('+++\nX\nR\nQ\n')
    assert out == BANNER + 'CLEAR\n\nRUN\n\nEND\n\nQUIT\n'
    assert repl.source == ''


def test_bounds_fault_keeps_session_alive():
    _, status, out, err = session('<\nR\nX\n' + '+' * 66 + '.\nR\nQ\n')
    assert status == 0
    assert out == BANNER + 'RUN\n\nEND\n\nCLEAR\n\nRUN\nB\nEND\n\nQUIT\n'
    assert err == 'bf: error at character position 0: memory underflow\n'


def test_each_run_gets_a_fresh_tape():
    _, _, out, _ = session('+' * 65 + '.\nR\nR\nQ\n')
    assert out.count('A') == 2


def test_capacity_applies_to_runs():
    _, _, _, err = session('>>\nR\nQ\n', capacity=2)
    assert err == 'bf: error at character position 1: memory overflow\n'


def test_unbalanced_brackets_end_the_session():
    with pytest.raises(SystemExit) as excinfo:
        session('[\nR\nQ\n')
    assert excinfo.value.code == 1


def test_program_input_comes_from_the_session_stream():
    _, _, out, _ = session(',.\nR\nZ\nQ\n')
    assert out == BANNER + 'RUN\nZ\nEND\n\nQUIT\n'


def test_end_of_input_ends_session():
    _, status, out, _ = session('+\n')
    assert status == 0
    assert out == BANNER


def test_lines_are_stripped():
    repl, _, out, _ = session('  +  \n  Q  \n')
    assert repl.source == '+'
    assert out.endswith('QUIT\n')
