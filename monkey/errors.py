"""Host-level exceptions.

Language-level errors never use these: they are `monkey.objects.Error`
values returned by the evaluator. The exceptions here cover faults a
Monkey program cannot observe or recover from.
"""


class MonkeyError(Exception):
    """Base class for fatal interpreter faults."""


class ParseErrors(MonkeyError):
    """Raised by the convenience runners when the source does not parse.

    The parser itself never raises; it only collects messages.
    """
    def __init__(self, errors):
        super().__init__('\n'.join(errors))
        self.errors = list(errors)


class EvaluatorFault(MonkeyError):
    """Raised when the evaluator meets a node a correct parser never produces."""
    def __init__(self, node):
        super().__init__(f"cannot evaluate node of type {type(node).__name__}")
        self.node = node
