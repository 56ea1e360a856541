from pathlib import Path

from monkey.interpreter import parse_program, Interpreter
from monkey.objects import Integer

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_closures(capsys):
    """Closures keep the scope they were created in alive after the
    creating call has returned, and each call gets its own scope."""
    source = (EXAMPLES / 'program_1.monkey').read_text(encoding='utf-8')
    program, errors = parse_program(source)
    assert errors == []
    result = Interpreter().run(program)
    out = capsys.readouterr().out.strip().split('\n')
    assert out == ['5 13', '42']
    assert result == Integer(12)
