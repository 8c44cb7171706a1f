import pytest

from chainlisp.interpreter import Interpreter


@pytest.fixture
def interp():
    """Fresh interpreter without the standard prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def run(interp):
    """Evaluate source in the `interp` fixture and return the printed result."""
    def _run(source: str) -> str:
        return interp.eval_to_string(source)
    return _run
