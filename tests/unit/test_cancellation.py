from unittest.mock import patch

import pytest

from upload_vault.processor.cancellation import CancellationToken
from upload_vault.processor.exceptions import OperationCancelledError


class TestCancellationToken:
    def test_fresh_token_is_not_cancelled(self) -> None:
        token = CancellationToken.with_timeout(60)

        assert not token.cancelled
        token.raise_if_cancelled()

    def test_cancel_sets_flag(self) -> None:
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError, match="cancelled"):
            token.raise_if_cancelled()

    def test_deadline_expires(self) -> None:
        with patch("upload_vault.processor.cancellation.time.monotonic", return_value=100.0):
            token = CancellationToken.with_timeout(5)
        with patch("upload_vault.processor.cancellation.time.monotonic", return_value=106.0):
            assert token.expired
            with pytest.raises(OperationCancelledError, match="deadline"):
                token.raise_if_cancelled()

    @pytest.mark.parametrize("seconds", [None, 0, -1])
    def test_no_deadline(self, seconds: float | None) -> None:
        token = CancellationToken.with_timeout(seconds)

        assert not token.expired
