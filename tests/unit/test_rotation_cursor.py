import pytest

from rotation_proxy.core.provider.rotation_cursor import RotationCursor


@pytest.mark.unit
class TestRotationCursor:
    """Test per-provider rotation cursors."""

    def setup_method(self) -> None:
        self.cursor = RotationCursor()

    def test_starts_at_zero(self):
        assert self.cursor.next("gemini", 3) == 0

    def test_advance_moves_past_used_index(self):
        assert self.cursor.advance("gemini", 0, 3) == 1
        assert self.cursor.next("gemini", 3) == 1

    def test_advance_wraps_around(self):
        assert self.cursor.advance("gemini", 2, 3) == 0
        assert self.cursor.next("gemini", 3) == 0

    def test_next_does_not_move_the_cursor(self):
        self.cursor.advance("gemini", 0, 3)
        self.cursor.next("gemini", 3)
        assert self.cursor.next("gemini", 3) == 1

    def test_stale_index_is_clamped_to_zero(self):
        """Should restart at zero when the stored index is out of range."""
        self.cursor.advance("gemini", 3, 5)  # cursor at 4
        assert self.cursor.next("gemini", 2) == 0
        assert self.cursor.peek("gemini") == 0

    def test_empty_pool_raises(self):
        with pytest.raises(ValueError):
            self.cursor.next("gemini", 0)

    def test_providers_are_independent(self):
        self.cursor.advance("gemini", 0, 3)
        assert self.cursor.next("mistral", 3) == 0

    def test_reset_rotation(self):
        self.cursor.advance("gemini", 1, 3)
        self.cursor.reset_rotation("gemini")
        assert self.cursor.peek("gemini") == 0
