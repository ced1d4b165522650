from app.modules.delivery.service import get_distance_function
from app.main import app


def place_orders(client):
    for customer, restaurant, when in [
        ("Beethoven", "vegan", "2014-03-11T12:00:00"),
        ("Bach", "cafe", "2014-03-12T12:00:00"),
        ("Mozart", "meat", "2014-03-14T12:00:00"),
        ("Rachmaninoff", "chinese", "2014-03-15T12:00:00"),
    ]:
        response = client.post("/api/v1/deliveries", json={
            "customer_name": customer,
            "restaurant_name": restaurant,
            "delivery_time": when
        })
        assert response.status_code == 201


def test_driver_rank_report(client, walt_data, sequence_distance):
    distances = sequence_distance(4, 11, 7, 2)
    app.dependency_overrides[get_distance_function] = lambda: distances
    place_orders(client)

    body = client.get("/api/v1/reports/drivers/rank").json()

    assert body["count"] == 11
    totals = [entry["total_distance"] for entry in body["ranking"]]
    assert totals == sorted(totals, reverse=True)
    assert body["ranking"][0]["driver_name"] == "Patricia"
    assert body["ranking"][0]["total_distance"] == 11
    assert [entry["rank"] for entry in body["ranking"]] == list(range(1, 12))


def test_driver_rank_report_by_city(client, walt_data):
    place_orders(client)

    body = client.get("/api/v1/reports/drivers/rank/Tel-Aviv").json()

    assert body["city"] == "Tel-Aviv"
    assert body["count"] == 3
    assert all(entry["city_name"] == "Tel-Aviv" for entry in body["ranking"])
    totals = [entry["total_distance"] for entry in body["ranking"]]
    assert totals == sorted(totals, reverse=True)
    assert sum(totals) == 15


def test_rank_report_for_unknown_city(client, walt_data):
    assert client.get("/api/v1/reports/drivers/rank/Eilat").status_code == 404


def test_rank_report_without_deliveries(client, walt_data):
    body = client.get("/api/v1/reports/drivers/rank/Haifa").json()
    assert body["count"] == 3
    assert all(entry["total_distance"] == 0 for entry in body["ranking"])
