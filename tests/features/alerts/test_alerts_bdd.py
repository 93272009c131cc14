"""BDD tests for the alert lifecycle."""

import pytest
from pytest_bdd import scenarios

scenarios(".")

pytestmark = [
    pytest.mark.tier(1),
    pytest.mark.services,
]
