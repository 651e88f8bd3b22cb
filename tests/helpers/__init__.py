"""Test helper utilities for the revtree test suite."""

from tests.helpers.cli_assertions import (
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_files_created,
    assert_output_contains,
)
from tests.helpers.fake_client import FakeRepositoryClient

__all__ = [
    "FakeRepositoryClient",
    "assert_command_success",
    "assert_command_failed",
    "assert_output_contains",
    "assert_error_message",
    "assert_files_created",
]
