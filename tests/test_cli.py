import io
import logging

import pytest

from brisk.__main__ import main


@pytest.fixture
def program(tmp_path):
    def write(source):
        path = tmp_path / 'program.brisk'
        path.write_text(source, encoding='utf-8')
        return str(path)
    return write


def test_run_prints_final_value(program, capsys):
    assert main([program('println("side effect");\n7 / 2 + 1.5')]) == 0
    out = capsys.readouterr().out
    assert out == 'side effect\n4.5\n'


def test_parse_errors_go_to_stderr(program, capsys):
    assert main([program('let = 1;\nlet y 2;\nprintln("never");')]) == 1
    captured = capsys.readouterr()
    assert captured.out == ''
    assert captured.err.splitlines() == [
        "Parse error: UnexpectedToken: expected 'identifier', got '=' at 1:5",
        "Parse error: UnexpectedToken: expected '=', got '2' at 2:7",
    ]


def test_runtime_error_goes_to_stderr(program, capsys):
    assert main([program('println("before");\n1 / 0;')]) == 1
    captured = capsys.readouterr()
    assert captured.out == 'before\n'
    assert captured.err.startswith('Runtime error: DivisionByZero: division by zero: 1/0 at 2:3')


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'nope.brisk')]) == 1
    assert 'not found' in capsys.readouterr().err


def test_tokens(program, capsys):
    assert main(['--tokens', program('let x = "hi";')]) == 0
    assert capsys.readouterr().out.splitlines() == [
        'LET let @1:1',
        'IDENTIFIER x @1:5',
        'ASSIGN = @1:7',
        'STRING hi @1:9',
        'SEMICOLON ; @1:13',
    ]


def test_emit_ast(program, capsys):
    assert main(['--emit-ast', program('fn f(a) { return a * 2 + 1; }')]) == 0
    assert capsys.readouterr().out == 'fn f(a) {\n  return ((a*2)+1)\n}\n'


def test_tokens_needs_a_program(capsys):
    with pytest.raises(SystemExit):
        main(['--tokens'])


def test_no_program_starts_repl(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('let a = 2;\na * 21\n'))
    assert main([]) == 0
    assert capsys.readouterr().out == '>> void\n>> 42\n>> \n'


def test_verbose_writes_debug_file(program, tmp_path):
    debug_file = tmp_path / 'debug.txt'
    assert main(['-vv', '--debug-file', str(debug_file), program('let a = 1;')]) == 0
    text = debug_file.read_text(encoding='utf-8')
    assert 'brisk.interpreter: declare a = 1' in text


def test_debug_handler_is_released_after_each_run(program, tmp_path):
    package_logger = logging.getLogger('brisk')
    handlers_before = list(package_logger.handlers)
    level_before = package_logger.level
    source = program('let a = 1;')
    debug_file = tmp_path / 'debug.txt'
    for _ in range(2):
        assert main(['-vv', '--debug-file', str(debug_file), source]) == 0
    assert package_logger.handlers == handlers_before
    assert package_logger.level == level_before
    # Each run rewrites the file, and records are written only once
    assert debug_file.read_text(encoding='utf-8').count('declare a = 1') == 1
