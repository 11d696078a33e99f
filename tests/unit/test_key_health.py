import pytest

from rotation_proxy.core.provider.key_health import (
    KeyHealthTracker,
    KeyStatus,
    classify_failure,
    is_rate_limit_message,
)


@pytest.mark.unit
class TestRateLimitClassification:
    """Test rate-limit classification of failure messages."""

    @pytest.mark.parametrize(
        "message",
        [
            "429 too many requests",
            "Rate limit exceeded",
            "RATE_LIMITED",
            "Quota exhausted for today",
            "API request failed: 429 {}",
        ],
    )
    def test_rate_limit_messages(self, message):
        assert is_rate_limit_message(message)
        assert classify_failure(message) is KeyStatus.RATE_LIMITED

    @pytest.mark.parametrize("message", ["invalid credentials", "500 internal error", ""])
    def test_other_messages_are_failures(self, message):
        assert classify_failure(message) is KeyStatus.FAILED

    def test_none_is_not_rate_limit(self):
        assert not is_rate_limit_message(None)

    def test_exceptions_are_classified_by_message(self):
        assert classify_failure(RuntimeError("quota")) is KeyStatus.RATE_LIMITED
        assert classify_failure(RuntimeError("boom")) is KeyStatus.FAILED


@pytest.mark.unit
class TestKeyHealthTracker:
    """Test positional key health records."""

    def setup_method(self) -> None:
        self.tracker = KeyHealthTracker()

    def test_unknown_provider_has_no_record(self):
        assert self.tracker.get("gemini") == []

    def test_sync_creates_untested_record(self):
        self.tracker.sync_length("gemini", 3)
        assert self.tracker.get("gemini") == [KeyStatus.UNTESTED] * 3

    def test_sync_same_length_keeps_history(self):
        self.tracker.sync_length("gemini", 2)
        self.tracker.mark_success("gemini", 1)
        self.tracker.sync_length("gemini", 2)
        assert self.tracker.get("gemini") == [KeyStatus.UNTESTED, KeyStatus.WORKING]

    def test_sync_different_length_resets_history(self):
        """Should reset history when the pool size changes."""
        self.tracker.sync_length("gemini", 2)
        self.tracker.mark_success("gemini", 0)
        self.tracker.sync_length("gemini", 3)
        assert self.tracker.get("gemini") == [KeyStatus.UNTESTED] * 3

    def test_mark_failure_returns_classification(self):
        """Should return the status it recorded."""
        self.tracker.sync_length("mistral", 2)
        assert self.tracker.mark_failure("mistral", 0, "429") is KeyStatus.RATE_LIMITED
        assert self.tracker.mark_failure("mistral", 1, "bad key") is KeyStatus.FAILED
        assert self.tracker.get("mistral") == [KeyStatus.RATE_LIMITED, KeyStatus.FAILED]

    def test_out_of_range_index_is_ignored(self):
        self.tracker.sync_length("mistral", 1)
        self.tracker.mark_success("mistral", 5)
        assert self.tracker.get("mistral") == [KeyStatus.UNTESTED]

    def test_get_returns_a_copy(self):
        self.tracker.sync_length("mistral", 1)
        self.tracker.get("mistral").append(KeyStatus.WORKING)
        assert len(self.tracker.get("mistral")) == 1

    def test_snapshot_uses_plain_strings(self):
        self.tracker.sync_length("cohere", 2)
        self.tracker.mark_failure("cohere", 0, "rate limit")
        assert self.tracker.snapshot() == {"cohere": ["rate-limited", "untested"]}

    def test_reset_forgets_provider(self):
        self.tracker.sync_length("cohere", 2)
        self.tracker.reset("cohere")
        assert self.tracker.snapshot() == {}
