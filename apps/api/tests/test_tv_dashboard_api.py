import uuid
from datetime import timedelta

from conftest import FIXED_NOW, utc
from shopqueue.models.booking import BookingStatus
from shopqueue.models.queue_entry import QueueStatus


def seed_queue(seed, shop):
    """Three active walk-ins: 20 min, 15 min, then one with no service on file."""
    cut = seed.service(shop, name="Cut", duration=20)
    trim = seed.service(shop, name="Trim", duration=15)
    seed.queue_entry(shop, cut, seed.customer("A", "One", "0400000001"))
    seed.queue_entry(shop, trim, seed.customer("B", "Two", "0400000002"), status=QueueStatus.arrived)
    seed.queue_entry(shop, None, seed.customer("C", "Three", "0400000003"))
    return cut, trim


def test_tv_queue_has_running_etas(client, seed):
    shop = seed.shop()
    seed_queue(seed, shop)

    body = client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()

    assert [q["eta_minutes"] for q in body["queue"]] == [0, 20, 35]
    assert [q["customer"]["first_name"] for q in body["queue"]] == ["A", "B", "C"]
    assert [q["status"] for q in body["queue"]] == ["queued", "arrived", "queued"]
    assert body["queue"][0]["service"] == {"name": "Cut", "duration_minutes": 20}
    assert body["queue"][2]["service"]["duration_minutes"] is None


def test_tv_queue_skips_finished_entries_and_other_shops(client, seed):
    shop = seed.shop()
    other = seed.shop(name="Other")
    svc = seed.service(shop, duration=20)
    seed.queue_entry(shop, svc, seed.customer("Done", "X", "0400000010"), status=QueueStatus.completed)
    seed.queue_entry(shop, svc, seed.customer("Gone", "Y", "0400000011"), status=QueueStatus.cancelled)
    seed.queue_entry(other, seed.service(other), seed.customer("Away", "Z", "0400000012"))
    seed.queue_entry(shop, svc, seed.customer("Here", "W", "0400000013"))

    queue = client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()["queue"]
    assert [q["customer"]["first_name"] for q in queue] == ["Here"]
    assert queue[0]["eta_minutes"] == 0


def test_tv_queue_is_capped(client, seed):
    shop = seed.shop()
    svc = seed.service(shop, duration=10)
    for i in range(25):
        seed.queue_entry(shop, svc, seed.customer(f"C{i}", "Q", f"04100000{i:02d}"))

    queue = client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()["queue"]
    assert len(queue) == 20
    assert queue[-1]["eta_minutes"] == 190


def test_tv_bookings_are_the_rest_of_today(client, seed):
    shop = seed.shop()
    svc = seed.service(shop, duration=30)
    cust = seed.customer()
    seed.booking(shop, svc, cust, utc(2030, 1, 7, 9, 0))  # already started
    upcoming = seed.booking(shop, svc, cust, utc(2030, 1, 7, 10, 0))
    seed.booking(shop, svc, cust, utc(2030, 1, 7, 11, 0), status=BookingStatus.cancelled)
    seed.booking(shop, svc, cust, utc(2030, 1, 8, 10, 0))  # tomorrow

    bookings = client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()["bookings"]

    assert [b["booking_id"] for b in bookings] == [str(upcoming.booking_id)]
    assert bookings[0]["eta_minutes"] == 30
    assert bookings[0]["customer"] == {"first_name": "Ada", "last_name": "Lovelace"}


def test_tv_ads_are_active_newest_first(client, seed):
    shop = seed.shop()
    for i in range(12):
        seed.ad(shop, title=f"ad {i}", created_at=FIXED_NOW - timedelta(days=12 - i))
    seed.ad(shop, title="hidden", is_active=False, created_at=FIXED_NOW)

    ads = client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()["ads"]

    assert len(ads) == 10
    assert ads[0]["title"] == "ad 11"
    assert "hidden" not in [a["title"] for a in ads]


def test_tv_settings_are_clamped_on_read(client, seed):
    shop = seed.shop(tv_left_percent=99, tv_ad_rotation_seconds=1)

    body = client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()
    assert body["tv_left_percent"] == 90
    assert body["tv_ad_rotation_seconds"] == 3


def test_tv_for_unknown_shop_renders_defaults(client):
    res = client.get("/api/tv", params={"shopId": str(uuid.uuid4())})

    assert res.status_code == 200
    body = res.json()
    assert body["tv_left_percent"] == 70
    assert body["tv_ad_rotation_seconds"] == 10
    assert body["queue"] == []
    assert body["bookings"] == []
    assert body["ads"] == []


def test_dashboard_stats(client, seed):
    shop = seed.shop()
    seed_queue(seed, shop)

    res = client.get("/api/admin/dashboard", params={"shopId": str(shop.shop_id)})
    assert res.status_code == 200
    body = res.json()

    assert body["shop"]["name"] == "Fade Street"
    stats = body["stats"]
    assert stats["total_active"] == 3
    assert stats["queued"] == 2
    assert stats["arrived"] == 1
    assert stats["avg_eta_minutes"] == 18
    assert stats["last_refresh"] == "2030-01-07T09:30:00+00:00"


def test_dashboard_empty_queue(client, seed):
    shop = seed.shop()

    stats = client.get("/api/admin/dashboard", params={"shopId": str(shop.shop_id)}).json()["stats"]
    assert stats["total_active"] == 0
    assert stats["avg_eta_minutes"] == 0


def test_dashboard_unknown_shop(client):
    res = client.get("/api/admin/dashboard", params={"shopId": str(uuid.uuid4())})
    assert res.status_code == 404
    assert res.json()["detail"] == "Shop not found"
