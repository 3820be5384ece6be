"""Error taxonomy for History Reader.

Every error carries a short machine-oriented ``reason`` and a Japanese
``user_message`` suitable for display.
"""


class ReaderError(Exception):
    """Base class for failures while selecting or fetching an article."""

    user_message = "不明なエラーが発生しました。"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class TransportError(ReaderError):
    """Raised on timeouts, network failures and non-2xx responses."""

    user_message = "ネットワークが遅いか、APIが応答しません。もう一度お試しください。"


class MalformedResponseError(ReaderError):
    """Raised when a response is not JSON or lacks the expected keys."""

    user_message = "Wikipedia APIからのデータが予期した形式ではありません。"


class NotFoundError(ReaderError):
    """Raised when the requested page does not exist."""

    user_message = "選択されたキーワードのページが見つかりません。"


class EmptyContentError(ReaderError):
    """Raised when a page exists but its extract is blank."""

    user_message = "記事の内容が空でした。"


class SelectionError(ReaderError):
    """Raised when no article could be resolved from the category walk."""

    user_message = "記事を選べませんでした。"


class ExhaustedRetriesError(ReaderError):
    """Raised once the fallback attempt has also failed."""

    def __init__(self, last_error: ReaderError, attempts: int) -> None:
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(f"all {attempts} attempts failed: {last_error.reason}")

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"取得できませんでした。\n{self.last_error.user_message}"
