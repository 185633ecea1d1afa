import pytest  # type: ignore

from leftrec.registry import use_registry


@pytest.fixture(autouse=True)
def registry():
    # Each test gets its own flag indexes.
    with use_registry() as indexes:
        yield indexes
