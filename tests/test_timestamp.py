"""Tests for timestamp normalization to Unix milliseconds."""

from datetime import datetime, timedelta, timezone

import pytest

from mlflow_api.utils.timestamp import ms_to_datetime, now_ms, to_ms


class TestNowMs:
    """Tests for now_ms function."""

    def test_uses_wall_clock(self, monkeypatch) -> None:
        """Current time is converted from seconds to integer milliseconds."""
        monkeypatch.setattr("mlflow_api.utils.timestamp.time.time", lambda: 1_700_000_000.1234)

        assert now_ms() == 1_700_000_000_123


class TestToMs:
    """Tests for to_ms function."""

    def test_int_passthrough(self) -> None:
        """Integers are already milliseconds."""
        assert to_ms(1705321845123) == 1705321845123

    def test_float_truncated(self) -> None:
        """Floats are truncated to whole milliseconds."""
        result = to_ms(1705321845123.999)

        assert result == 1705321845123
        assert isinstance(result, int)

    def test_aware_datetime(self) -> None:
        """Timezone-aware datetimes keep their instant."""
        jst = timezone(timedelta(hours=9))

        assert to_ms(datetime(2024, 1, 1, 9, 0, 0, tzinfo=jst)) == 1_704_067_200_000

    def test_naive_datetime_is_utc(self) -> None:
        """Naive datetimes are taken as UTC."""
        assert to_ms(datetime(2024, 1, 1)) == 1_704_067_200_000

    @pytest.mark.parametrize(
        "text",
        ["2024-01-01T00:00:00Z", "2024-01-01T00:00:00+00:00", "2024-01-01T09:00:00+09:00", "2024-01-01T00:00:00"],
    )
    def test_iso8601_strings(self, text) -> None:
        """ISO 8601 strings with any offset map to the same instant."""
        assert to_ms(text) == 1_704_067_200_000

    def test_bool_rejected(self) -> None:
        """Booleans are not timestamps even though they are ints."""
        with pytest.raises(ValueError, match="boolean"):
            to_ms(True)

    @pytest.mark.parametrize(
        "value,message",
        [
            (None, "cannot be None"),
            ("", "cannot be empty"),
            ("   ", "cannot be empty"),
            ("yesterday", "Invalid timestamp format"),
            ([1, 2, 3], "Unsupported timestamp type"),
        ],
    )
    def test_invalid_values(self, value, message) -> None:
        """Unusable values raise ValueError."""
        with pytest.raises(ValueError, match=message):
            to_ms(value)  # type: ignore[arg-type]


class TestMsToDatetime:
    """Tests for ms_to_datetime function."""

    def test_utc(self) -> None:
        """Milliseconds become a UTC datetime."""
        assert ms_to_datetime(1_704_067_200_000) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_negative_timestamp(self) -> None:
        """Timestamps before the epoch are supported."""
        assert ms_to_datetime(-86_400_000).date().isoformat() == "1969-12-31"
