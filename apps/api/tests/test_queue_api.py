from sqlalchemy import func, select

from conftest import FIXED_NOW
from shopqueue.models.customer import Customer
from shopqueue.models.queue_entry import QueueEntry, QueueStatus
from shopqueue.scheduling.time_utils import as_utc


def join(client, shop, service, phone="0400000001", first="Ada", last="Lovelace"):
    return client.post(
        "/api/join-queue",
        json={
            "shopId": str(shop.shop_id),
            "serviceId": str(service.service_id),
            "firstName": first,
            "lastName": last,
            "phone": phone,
        },
    )


def checkin(client, shop, last="Lovelace", phone="0400000001"):
    return client.post(
        "/api/kiosk-checkin",
        json={"shopId": str(shop.shop_id), "lastName": last, "phone": phone},
    )


def test_join_queue_creates_queued_entry(client, seed, db):
    shop = seed.shop()
    svc = seed.service(shop)

    res = join(client, shop, svc)
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True

    entry = db.execute(select(QueueEntry)).scalar_one()
    assert str(entry.queue_entry_id) == body["queue_entry_id"]
    assert str(entry.customer_id) == body["customer_id"]
    assert entry.status == QueueStatus.queued
    assert entry.checked_in_at is None


def test_join_queue_reuses_customer_by_phone(client, seed, db):
    shop = seed.shop()
    svc = seed.service(shop)

    first = join(client, shop, svc).json()
    second = join(client, shop, svc, first="Someone", last="Else").json()

    assert first["customer_id"] == second["customer_id"]
    assert first["queue_entry_id"] != second["queue_entry_id"]
    assert db.execute(select(func.count()).select_from(Customer)).scalar_one() == 1


def test_join_queue_validation_and_lookup(client, seed):
    shop = seed.shop()
    svc = seed.service(shop)
    other_svc = seed.service(seed.shop(name="Other"))

    res = client.post("/api/join-queue", json={"shopId": str(shop.shop_id), "serviceId": str(svc.service_id)})
    assert res.status_code == 400

    assert join(client, shop, other_svc).status_code == 404


def test_checkin_marks_latest_entry_arrived(client, seed, db):
    shop = seed.shop()
    svc = seed.service(shop)
    join(client, shop, svc)

    res = checkin(client, shop, last="  lovelace ")
    assert res.status_code == 200

    db.expire_all()
    entry = db.execute(select(QueueEntry)).scalar_one()
    assert res.json()["queue_entry_id"] == str(entry.queue_entry_id)
    assert entry.status == QueueStatus.arrived
    assert as_utc(entry.checked_in_at) == FIXED_NOW


def test_checkin_unknown_phone(client, seed):
    shop = seed.shop()

    res = checkin(client, shop, phone="0499999999")
    assert res.status_code == 404
    assert res.json()["detail"] == "Customer not found. Please join queue first."


def test_checkin_wrong_last_name(client, seed):
    shop = seed.shop()
    svc = seed.service(shop)
    join(client, shop, svc)

    res = checkin(client, shop, last="Babbage")
    assert res.status_code == 401
    assert res.json()["detail"] == "Last name does not match phone number."


def test_checkin_without_queued_entry(client, seed):
    shop = seed.shop()
    svc = seed.service(shop)
    seed.customer()

    res = checkin(client, shop)
    assert res.status_code == 404
    assert res.json()["detail"] == "No active queued booking found for this customer."

    # arrived entries are not checked in twice
    join(client, shop, svc)
    assert checkin(client, shop).status_code == 200
    assert checkin(client, shop).status_code == 404


def test_checkin_is_scoped_to_the_shop(client, seed):
    shop = seed.shop()
    other = seed.shop(name="Other")
    join(client, shop, seed.service(shop))

    assert checkin(client, other).status_code == 404
