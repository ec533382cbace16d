from pathlib import Path

from brisk.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_arrays_and_strings(capsys):
    with open(EXAMPLES / 'arrays.brisk', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['[1, 2.5, three, true]', '4 5', 't', 'ab']
