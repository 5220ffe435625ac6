import uuid


def test_create_and_list_services(client, seed):
    shop = seed.shop()

    res = client.post(
        "/api/admin/services",
        json={"shopId": str(shop.shop_id), "name": " Beard Trim ", "duration_minutes": 15, "price": "20.50"},
    )
    assert res.status_code == 200
    created = res.json()["service"]
    assert created["name"] == "Beard Trim"
    assert created["duration_minutes"] == 15
    assert created["slack_minutes"] == 0
    assert created["price"] == 20.5
    assert created["is_active"] is True

    listed = client.get("/api/admin/services", params={"shopId": str(shop.shop_id)}).json()["services"]
    assert [s["service_id"] for s in listed] == [created["service_id"]]


def test_service_duration_must_be_positive(client, seed):
    shop = seed.shop()

    for duration in [0, -10]:
        res = client.post(
            "/api/admin/services",
            json={"shopId": str(shop.shop_id), "name": "Nothing", "duration_minutes": duration, "price": 0},
        )
        assert res.status_code == 400


def test_service_for_unknown_shop(client):
    res = client.post(
        "/api/admin/services",
        json={"shopId": str(uuid.uuid4()), "name": "Cut", "duration_minutes": 30, "price": 30},
    )
    assert res.status_code == 404


def test_patch_service_only_touches_sent_fields(client, seed):
    shop = seed.shop()
    svc = seed.service(shop, name="Haircut", duration=30, price=35)

    res = client.patch("/api/admin/services", json={"id": str(svc.service_id), "duration_minutes": 40})
    assert res.status_code == 200
    updated = res.json()["service"]
    assert updated["duration_minutes"] == 40
    assert updated["name"] == "Haircut"
    assert updated["price"] == 35.0


def test_deactivated_service_leaves_the_shop_page(client, seed):
    shop = seed.shop()
    long_cut = seed.service(shop, name="Long", duration=60)
    seed.service(shop, name="Quick", duration=10)
    seed.service(shop, name="Retired", duration=5, is_active=False)

    names = [s["name"] for s in client.get("/api/shop", params={"id": str(shop.shop_id)}).json()["services"]]
    assert names == ["Quick", "Long"]

    client.patch("/api/admin/services", json={"id": str(long_cut.service_id), "is_active": False})
    names = [s["name"] for s in client.get("/api/shop", params={"id": str(shop.shop_id)}).json()["services"]]
    assert names == ["Quick"]


def test_patch_unknown_service(client):
    res = client.patch("/api/admin/services", json={"id": str(uuid.uuid4()), "is_active": False})
    assert res.status_code == 404


def test_shop_page(client, seed):
    shop = seed.shop()

    body = client.get("/api/shop", params={"id": str(shop.shop_id)}).json()
    assert body["shop"] == {"shop_id": str(shop.shop_id), "name": "Fade Street", "suburb": "Newtown"}
    assert body["services"] == []

    assert client.get("/api/shop", params={"id": str(uuid.uuid4())}).status_code == 404
    assert client.get("/api/shop", params={"id": "nope"}).status_code == 400


def test_ads_create_list_toggle(client, seed):
    shop = seed.shop()

    res = client.post(
        "/api/admin/ads",
        json={"shopId": str(shop.shop_id), "title": "Student discount", "imageUrl": "https://cdn.example.com/a.png"},
    )
    assert res.status_code == 200
    ad = res.json()["ad"]
    assert ad["image_url"] == "https://cdn.example.com/a.png"
    assert ad["video_url"] is None
    assert ad["is_active"] is True

    res = client.patch("/api/admin/ads", json={"id": ad["ad_id"], "is_active": False})
    assert res.status_code == 200
    assert res.json()["ad"]["is_active"] is False

    listed = client.get("/api/admin/ads", params={"shopId": str(shop.shop_id)}).json()["ads"]
    assert [a["ad_id"] for a in listed] == [ad["ad_id"]]
    # inactive ads stay listed for admins but leave the TV
    assert client.get("/api/tv", params={"shopId": str(shop.shop_id)}).json()["ads"] == []


def test_ad_needs_some_content(client, seed):
    shop = seed.shop()

    res = client.post("/api/admin/ads", json={"shopId": str(shop.shop_id), "title": "  "})
    assert res.status_code == 400


def test_toggle_unknown_ad(client):
    res = client.patch("/api/admin/ads", json={"id": str(uuid.uuid4()), "is_active": True})
    assert res.status_code == 404


def test_tv_settings_read_defaults(client, seed):
    shop = seed.shop()

    body = client.get("/api/admin/tv-settings", params={"shopId": str(shop.shop_id)}).json()
    assert body == {"ok": True, "tv_left_percent": 70, "tv_ad_rotation_seconds": 10}


def test_tv_settings_write_is_clamped(client, seed):
    shop = seed.shop()
    sid = str(shop.shop_id)

    body = client.patch(
        "/api/admin/tv-settings",
        json={"shopId": sid, "tv_left_percent": 150, "tv_ad_rotation_seconds": 0},
    ).json()
    assert body["tv_left_percent"] == 90
    assert body["tv_ad_rotation_seconds"] == 3

    body = client.patch(
        "/api/admin/tv-settings",
        json={"shopId": sid, "tv_left_percent": "55", "tv_ad_rotation_seconds": "fast"},
    ).json()
    assert body["tv_left_percent"] == 55
    assert body["tv_ad_rotation_seconds"] == 10

    tv = client.get("/api/tv", params={"shopId": sid}).json()
    assert tv["tv_left_percent"] == 55
    assert tv["tv_ad_rotation_seconds"] == 10

    res = client.patch(
        "/api/admin/tv-settings",
        json={"shopId": sid, "tv_left_percent": "1e999", "tv_ad_rotation_seconds": "-inf"},
    )
    assert res.status_code == 200
    assert res.json()["tv_left_percent"] == 70
    assert res.json()["tv_ad_rotation_seconds"] == 10


def test_tv_settings_unknown_shop(client):
    res = client.get("/api/admin/tv-settings", params={"shopId": str(uuid.uuid4())})
    assert res.status_code == 404
