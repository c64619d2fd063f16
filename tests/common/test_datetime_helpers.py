# -*- coding: utf-8 -*-
from datetime import datetime, timedelta, timezone

import pytest

from utils.datetime_helpers import datetime_to_iso, to_millis, utc_now


def test_utc_now_is_aware():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "dt, expected",
    [
        (datetime(2025, 10, 20, 16, 0, 0), "2025-10-20T16:00:00+00:00"),
        (
            datetime(2025, 10, 21, 0, 0, 0, tzinfo=timezone(timedelta(hours=8))),
            "2025-10-20T16:00:00+00:00",
        ),
        (None, None),
    ],
)
def test_datetime_to_iso(dt, expected):
    assert datetime_to_iso(dt) == expected


def test_to_millis_treats_naive_as_utc():
    naive = datetime(2025, 1, 1, 0, 0, 1)
    aware = naive.replace(tzinfo=timezone.utc)
    assert to_millis(naive) == to_millis(aware) == 1735689601000
