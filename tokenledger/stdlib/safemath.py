from tokenledger.exceptions import ArithmeticOverflow
from tokenledger import config


def _require_uint(operation, a, b):
    for n in (a, b):
        if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= config.MAX_UINT256:
            raise ArithmeticOverflow(operation=operation, a=a, b=b)


def add(a, b):
    _require_uint('add', a, b)

    c = a + b
    if c > config.MAX_UINT256:
        raise ArithmeticOverflow(operation='add', a=a, b=b)
    return c


def sub(a, b):
    _require_uint('sub', a, b)

    if b > a:
        raise ArithmeticOverflow(operation='sub', a=a, b=b)
    return a - b


def mul(a, b):
    _require_uint('mul', a, b)

    c = a * b
    if c > config.MAX_UINT256:
        raise ArithmeticOverflow(operation='mul', a=a, b=b)
    return c


def require_uint(n):
    _require_uint('check', n, 0)
    return n
