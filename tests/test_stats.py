from datetime import date

import pytest

from conftest import create_expense
from expenso.stats.service import month_bounds, months_before, today_in


def category_ids(client, user):
    return {c["name"]: c["id"] for c in client.get("/api/categories", headers=user["headers"]).json()}


@pytest.mark.parametrize(
    "day,months,expected",
    [
        (date(2024, 8, 15), 6, date(2024, 2, 15)),
        (date(2024, 3, 10), 6, date(2023, 9, 10)),
        (date(2024, 8, 31), 6, date(2024, 2, 29)),
        (date(2023, 12, 31), 1, date(2023, 11, 30)),
    ],
)
def test_months_before(day, months, expected):
    assert months_before(day, months) == expected


def test_month_bounds_wraps_year():
    assert month_bounds(date(2024, 12, 17)) == (date(2024, 12, 1), date(2025, 1, 1))
    assert month_bounds(date(2024, 2, 29)) == (date(2024, 2, 1), date(2024, 3, 1))


def test_dashboard_stats(client, alice, bob):
    ids = category_ids(client, alice)
    today = today_in("UTC")
    last_year = today.replace(year=today.year - 1, day=1)

    create_expense(client, alice, ids["Shopping"], amount=100, day=last_year.isoformat(), description="Old")
    for i in range(6):
        create_expense(
            client, alice, ids["Food & Dining"], amount=10, day=today.isoformat(), description=f"Meal {i}"
        )
    create_expense(client, bob, category_ids(client, bob)["Shopping"], amount=5000, day=today.isoformat())

    resp = client.get("/api/dashboard/stats", headers=alice["headers"])

    assert resp.status_code == 200
    stats = resp.json()
    assert stats["totalExpenses"] == 160
    assert stats["monthlyExpenses"] == 60
    assert stats["totalCategories"] == 6
    assert len(stats["recentExpenses"]) == 5
    assert stats["recentExpenses"][0]["description"] == "Meal 5"
    assert stats["recentExpenses"][0]["category"] == "Food & Dining"
    assert stats["recentExpenses"][0]["amount"] == 10


def test_dashboard_stats_for_new_user(client, alice):
    stats = client.get("/api/dashboard/stats", headers=alice["headers"]).json()

    assert stats == {
        "totalExpenses": 0,
        "monthlyExpenses": 0,
        "totalCategories": 6,
        "recentExpenses": [],
    }


def test_category_stats_only_lists_spending(client, alice, bob):
    ids = category_ids(client, alice)
    create_expense(client, alice, ids["Shopping"], amount=30)
    create_expense(client, alice, ids["Shopping"], amount=20)
    create_expense(client, alice, ids["Healthcare"], amount=75.25)
    create_expense(client, bob, category_ids(client, bob)["Transportation"], amount=1000)

    resp = client.get("/api/stats/categories", headers=alice["headers"])

    assert resp.status_code == 200
    assert resp.json() == [
        {"category": "Healthcare", "amount": 75.25, "count": 1},
        {"category": "Shopping", "amount": 50, "count": 2},
    ]


def test_monthly_stats_cover_last_six_months(client, alice, bob):
    ids = category_ids(client, alice)
    today = today_in("UTC")
    this_month = today.replace(day=1)
    three_back = months_before(this_month, 3)
    eight_back = months_before(this_month, 8)

    create_expense(client, alice, ids["Shopping"], amount=10, day=today.isoformat())
    create_expense(client, alice, ids["Healthcare"], amount=15, day=this_month.isoformat())
    create_expense(client, alice, ids["Shopping"], amount=40, day=three_back.isoformat())
    create_expense(client, alice, ids["Shopping"], amount=99, day=eight_back.isoformat())
    create_expense(client, bob, category_ids(client, bob)["Shopping"], amount=7, day=today.isoformat())

    resp = client.get("/api/stats/monthly", headers=alice["headers"])

    assert resp.status_code == 200
    assert resp.json() == [
        {"month": three_back.strftime("%Y-%m"), "amount": 40},
        {"month": this_month.strftime("%Y-%m"), "amount": 25},
    ]


def test_stats_require_token(client):
    assert client.get("/api/stats/monthly").status_code == 401
    assert client.get("/api/stats/categories").status_code == 401
    assert client.get("/api/dashboard/stats").status_code == 401
