import io
import sys

import pytest

from monkey.__main__ import PROMPT, main, start_repl
from monkey.interpreter import Interpreter


@pytest.fixture(autouse=True)
def keep_recursion_limit():
    limit = sys.getrecursionlimit()
    yield
    sys.setrecursionlimit(limit)


@pytest.fixture
def write_program(tmp_path):
    def write(source):
        path = tmp_path / 'program.monkey'
        path.write_text(source, encoding='utf-8')
        return str(path)
    return write


def test_runs_file_and_prints_result(write_program, capsys):
    main([write_program('println(1 + 2); 5 * 5')])
    assert capsys.readouterr().out == '3\n25\n'


def test_runtime_error_value_is_printed(write_program, capsys):
    main([write_program('1 + true')])
    assert capsys.readouterr().out == 'ERROR: type mismatch: INTEGER + BOOLEAN\n'


def test_missing_file(tmp_path, capsys):
    missing = tmp_path / 'nope.monkey'
    with pytest.raises(SystemExit) as excinfo:
        main([str(missing)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == f"Error: file {missing} not found\n"


def test_parse_errors_exit_nonzero(write_program, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([write_program('let = 1;\nlet x 2;')])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == (
        '\texpected next token to be IDENT, got = instead\n'
        '\texpected next token to be =, got INT instead\n'
    )


def test_print_ast(write_program, capsys):
    main(['--print-ast', write_program('let x = 1 + 2 * 3;\nif (x > 5) { x } else { -x }')])
    assert capsys.readouterr().out == (
        'let x = (1 + (2 * 3));\n'
        'if ((x > 5)) { x } else { (-x) }\n'
    )


def test_print_ast_with_errors(write_program, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['--print-ast', write_program('+1')])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == '\tno prefix parse function for + found\n'


def test_unbounded_recursion_is_fatal(write_program, capsys):
    path = write_program('let f = fn(x) { f(x + 1) }; f(0)')
    with pytest.raises(SystemExit) as excinfo:
        main(['--recursion-limit', '500', path])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith('Runtime error: ')


def test_debug_file_written_with_verbosity(write_program, tmp_path, capsys):
    debug_file = tmp_path / 'trace.txt'
    main(['-vv', '--debug-file', str(debug_file), write_program('let a = 1; a')])
    assert capsys.readouterr().out == '1\n'
    assert debug_file.read_text(encoding='utf-8').splitlines() == [
        'run program: 2 statements',
        'let a = 1',
    ]


def test_repl_keeps_bindings():
    stdin = io.StringIO('let a = 2;\n\na * 3\nlet = 1\nb\n')
    out = io.StringIO()
    start_repl(stdin, out, Interpreter(output=out))
    assert out.getvalue() == (
        PROMPT + '2\n'
        + PROMPT + PROMPT + '6\n'
        + PROMPT + '\texpected next token to be IDENT, got = instead\n'
        + PROMPT + 'ERROR: identifier not found: b\n'
        + PROMPT
    )


def test_repl_from_main(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'stdin', io.StringIO('println("hi")\n'))
    main([])
    out = capsys.readouterr().out
    assert 'this is the Monkey programming language!' in out
    assert out.endswith(PROMPT + 'hi\nnull\n' + PROMPT)


def test_huge_string_repetition_is_reported(write_program, capsys):
    main([write_program('"ab" * 9223372036854775807')])
    assert capsys.readouterr().out == 'ERROR: string repetition too large: 9223372036854775807\n'
