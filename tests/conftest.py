import pytest

from swaptrace.domain.enums import SwapperStrategy
from swaptrace.parser.utils.context import ClassifierContext


@pytest.fixture()
def context() -> ClassifierContext:
    return ClassifierContext()


@pytest.fixture()
def largest_delta_context() -> ClassifierContext:
    return ClassifierContext(swapper_strategy=SwapperStrategy.LARGEST_DELTA)
