from pathlib import Path

from monkey.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_hashes_and_arrays(capsys):
    source = (EXAMPLES / 'program_3.monkey').read_text(encoding='utf-8')
    program, errors = parse_program(source)
    assert errors == []
    Interpreter().run(program)
    out = capsys.readouterr().out.strip().split('\n')
    # Expect property access, nested indexing, printf and boolean keys
    assert out == [
        'Alice 28',
        '2 4',
        'Alice is 24 years old',
        'yes one null',
    ]
