import pytest

from envbind.core.enums import ResolutionStatus
from envbind.core.exceptions import (
    CacheDisabledError, EnvbindError, MissingVariableError, ReloadError
)
from envbind.resolver import Resolution


class TestResolution:
    """Result object behaviour."""

    def test_ok(self):
        resolution = Resolution.ok(42, source="system")

        assert resolution
        assert not resolution.is_error
        assert resolution.status == ResolutionStatus.RESOLVED
        assert resolution.unwrap() == 42

    def test_ok_none_is_truthy(self):
        assert Resolution.ok(None)

    def test_error(self):
        resolution = Resolution.error(ResolutionStatus.UNDEFINED, "missing")

        assert not resolution
        assert resolution.is_error
        assert resolution.value is None
        assert resolution.error_message == "missing"

    @pytest.mark.parametrize("status,error_class", [
        (ResolutionStatus.UNDEFINED, MissingVariableError),
        (ResolutionStatus.CACHE_DISABLED, CacheDisabledError),
        (ResolutionStatus.RELOAD_FAILED, ReloadError),
    ])
    def test_unwrap_raises(self, status, error_class):
        with pytest.raises(error_class, match="boom"):
            Resolution.error(status, "boom").unwrap()

    def test_errors_share_a_base(self):
        with pytest.raises(EnvbindError):
            Resolution.error(ResolutionStatus.UNDEFINED, "boom").unwrap()


def test_statuses():
    assert {status.value for status in ResolutionStatus} == {
        "resolved", "cached", "stored", "undefined", "cache_disabled", "reload_failed",
    }
