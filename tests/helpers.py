import operator
from collections.abc import Callable
from typing import NamedTuple

import pytest

TestFunction = Callable[..., None]


def cases(
    name_position: int,
    *cases: NamedTuple,
) -> Callable[[TestFunction], TestFunction]:
    def wrapper(test_function: TestFunction) -> TestFunction:
        return pytest.mark.parametrize(
            argnames="case",
            argvalues=list(cases),
            ids=operator.itemgetter(name_position),
        )(test_function)

    return wrapper
