import pytest

import symbolic_calculus as sc
from symbolic_calculus.configuration import Configuration


@pytest.fixture(autouse=True)
def global_registry():
    """Initialise the process-wide registry around every test."""
    sc.init()
    yield sc.get_global_configuration()
    sc.shutdown()


@pytest.fixture
def registry():
    """Isolated, initialised registry that tests may extend freely."""
    configuration = Configuration()
    configuration.init()
    yield configuration
    configuration.shutdown()
