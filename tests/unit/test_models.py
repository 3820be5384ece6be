"""Unit tests for shared models."""

import pytest

from history_reader.errors import (
    EmptyContentError,
    ExhaustedRetriesError,
    MalformedResponseError,
    NotFoundError,
    SelectionError,
    TransportError,
)
from history_reader.models import DisplayPayload, FetchStatus, ReadResult, RetryState


class TestRetryState:
    """Tests for RetryState."""

    def test_starts_at_zero(self) -> None:
        state = RetryState(max_attempts=3)
        assert state.attempt == 0
        assert state.is_final is False

    def test_advance_until_final(self) -> None:
        state = RetryState(max_attempts=2)
        assert state.advance() is True
        assert state.advance() is True
        assert state.is_final is True
        assert state.attempt == 2

    def test_never_exceeds_max(self) -> None:
        """Advancing past the budget reports False and leaves the counter alone."""
        state = RetryState(max_attempts=1)
        state.advance()
        assert state.advance() is False
        assert state.attempt == 1

    def test_zero_budget_is_final_immediately(self) -> None:
        state = RetryState(max_attempts=0)
        assert state.is_final is True
        assert state.advance() is False


class TestDisplayPayload:
    """Tests for DisplayPayload."""

    def test_content_layout(self) -> None:
        payload = DisplayPayload(
            header_topic="本能寺の変",
            header_category="戦国時代の事件",
            body_text="天正10年6月2日...",
        )
        assert payload.content == "【主題: 本能寺の変】\n(カテゴリ: 戦国時代の事件)\n\n天正10年6月2日..."

    def test_char_count_matches_content(self) -> None:
        payload = DisplayPayload(header_topic="a", header_category="b", body_text="c" * 100)
        assert payload.char_count == len(payload.content)


class TestReadResult:
    def test_success_only_when_complete(self) -> None:
        assert ReadResult(status=FetchStatus.COMPLETE, attempts=1).success is True
        assert ReadResult(status=FetchStatus.ERROR, attempts=4, error="x").success is False


class TestErrors:
    """Tests for the error taxonomy."""

    def test_reason_is_kept(self) -> None:
        error = NotFoundError("page not found: 江戸")
        assert error.reason == "page not found: 江戸"
        assert str(error) == "page not found: 江戸"

    def test_exhausted_message_uses_last_error_user_message(self) -> None:
        """The final message is the Japanese message of the last failure, not its reason."""
        error = ExhaustedRetriesError(NotFoundError("page not found: 江戸"), attempts=4)
        assert error.user_message == "取得できませんでした。\n選択されたキーワードのページが見つかりません。"
        assert "page not found" not in error.user_message
        assert "4 attempts" in error.reason

    @pytest.mark.parametrize(
        "error_class,expected",
        [
            (TransportError, "ネットワークが遅いか、APIが応答しません。もう一度お試しください。"),
            (MalformedResponseError, "Wikipedia APIからのデータが予期した形式ではありません。"),
            (EmptyContentError, "記事の内容が空でした。"),
            (SelectionError, "記事を選べませんでした。"),
        ],
    )
    def test_exhausted_message_per_error_type(self, error_class, expected: str) -> None:
        error = ExhaustedRetriesError(error_class("reason"), attempts=1)
        assert error.user_message == f"取得できませんでした。\n{expected}"
