from datetime import datetime

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

import database
from database import create_document, get_db
from main import app

TABLE_ID = str(ObjectId())
GUEST_ID = str(ObjectId())


class TestOrders:

    def order(self, **overrides):
        payload = {"table_id": TABLE_ID, "date_time": "2026-04-01T12:30:00", "status": "new", "number": 7}
        payload.update(overrides)
        return payload

    def test_create_and_get(self, client, guest, worker):
        response = client.post("/api/order", json=self.order(), headers=guest)
        assert response.status_code == 201
        order_id = response.json()["id"]

        fetched = client.get(f"/api/order/{order_id}", headers=worker).json()
        assert fetched["number"] == 7
        assert fetched["date_time"] == "2026-04-01T12:30:00"

    def test_aware_time_stored_as_utc(self, client, db, worker):
        client.post("/api/order", json=self.order(date_time="2026-04-01T15:30:00+03:00"), headers=worker)
        assert db["order"].find_one()["date_time"] == datetime(2026, 4, 1, 12, 30)

    def test_list_is_staff_only(self, client, guest):
        assert client.get("/api/order", headers=guest).status_code == 403

    def test_items(self, client, db, worker):
        order_id = client.post("/api/order", json=self.order(), headers=worker).json()["id"]
        menu_id = create_document(db, "menuitem", {"restaurant_id": str(ObjectId()), "name": "Tea"})

        response = client.post(f"/api/order/{order_id}/items", json={"menu_id": menu_id, "amount": 2}, headers=worker)
        assert response.status_code == 201
        item_id = response.json()["id"]

        items = client.get(f"/api/order/{order_id}/items", headers=worker).json()
        assert [(i["menu_id"], i["amount"]) for i in items] == [(menu_id, 2)]

        assert client.delete(f"/api/order/items/{item_id}", headers=worker).status_code == 200
        assert client.get(f"/api/order/{order_id}/items", headers=worker).json() == []

    def test_item_for_unknown_dish(self, client, worker):
        order_id = client.post("/api/order", json=self.order(), headers=worker).json()["id"]
        response = client.post(f"/api/order/{order_id}/items", json={"menu_id": str(ObjectId())}, headers=worker)
        assert response.status_code == 400

    def test_item_amount_positive(self, client, worker):
        order_id = client.post("/api/order", json=self.order(), headers=worker).json()["id"]
        response = client.post(f"/api/order/{order_id}/items", json={"menu_id": str(ObjectId()), "amount": 0}, headers=worker)
        assert response.status_code == 400

    def test_delete_removes_items(self, client, db, worker):
        order_id = client.post("/api/order", json=self.order(), headers=worker).json()["id"]
        create_document(db, "orderitem", {"order_id": order_id, "menu_id": str(ObjectId()), "amount": 1})

        assert client.delete(f"/api/order/{order_id}", headers=worker).status_code == 200
        assert db["orderitem"].count_documents({}) == 0

    def test_update(self, client, worker):
        order_id = client.post("/api/order", json=self.order(), headers=worker).json()["id"]
        response = client.put(f"/api/order/{order_id}", json=self.order(status="served"), headers=worker)
        assert response.status_code == 200
        assert client.get(f"/api/order/{order_id}", headers=worker).json()["status"] == "served"


class TestBookings:

    def book(self, client, headers, when, guest_id=GUEST_ID):
        response = client.post("/api/booking", json={
            "table_id": TABLE_ID, "guest_id": guest_id, "date_time": when, "persons_count": 2,
        }, headers=headers)
        assert response.status_code == 201
        return response.json()["id"]

    def test_guest_bookings(self, client, guest):
        self.book(client, guest, "2026-06-01T18:00:00")
        self.book(client, guest, "2026-06-02T18:00:00", guest_id=str(ObjectId()))
        response = client.get(f"/api/booking/guest-bookings/{GUEST_ID}", headers=guest)
        assert [b["date_time"] for b in response.json()] == ["2026-06-01T18:00:00"]

    def test_by_exact_date(self, client, guest):
        booking_id = self.book(client, guest, "2026-06-01T18:00:00")
        response = client.get("/api/booking/bookings-by-date", params={"date": "2026-06-01T18:00:00"}, headers=guest)
        assert response.json()["id"] == booking_id

        response = client.get("/api/booking/bookings-by-date", params={"date": "2026-06-01T19:00:00"}, headers=guest)
        assert response.status_code == 404

    def test_day_sorted_descending(self, client, guest, worker):
        self.book(client, guest, "2026-06-01T12:00:00")
        self.book(client, guest, "2026-06-01T20:00:00")
        self.book(client, guest, "2026-06-02T09:00:00")
        response = client.get("/api/booking/sorted-bookings-by-date", params={"date": "2026-06-01T00:00:00"}, headers=worker)
        assert [b["date_time"] for b in response.json()] == ["2026-06-01T20:00:00", "2026-06-01T12:00:00"]

    def test_persons_count_positive(self, client, guest):
        response = client.post("/api/booking", json={
            "table_id": TABLE_ID, "guest_id": GUEST_ID, "date_time": "2026-06-01T18:00:00", "persons_count": 0,
        }, headers=guest)
        assert response.status_code == 400

    def test_delete(self, client, guest):
        booking_id = self.book(client, guest, "2026-06-01T18:00:00")
        assert client.delete(f"/api/booking/{booking_id}", headers=guest).status_code == 200
        assert client.get(f"/api/booking/{booking_id}", headers=guest).status_code == 404


class TestSchedules:

    def test_finish_must_follow_start(self, client, worker):
        response = client.post("/api/schedule", json={
            "staff_id": str(ObjectId()),
            "start_date_time": "2026-06-01T18:00:00",
            "finish_date_time": "2026-06-01T09:00:00",
        }, headers=worker)
        assert response.status_code == 400

    def test_by_staff(self, client, worker, admin):
        staff_id = str(ObjectId())
        for day in (2, 1):
            response = client.post("/api/schedule", json={
                "staff_id": staff_id,
                "start_date_time": f"2026-06-0{day}T09:00:00",
                "finish_date_time": f"2026-06-0{day}T17:00:00",
            }, headers=worker)
            assert response.status_code == 201

        shifts = client.get(f"/api/schedule/staff/{staff_id}", headers=worker).json()
        assert [s["start_date_time"] for s in shifts] == ["2026-06-01T09:00:00", "2026-06-02T09:00:00"]

        assert client.delete(f"/api/schedule/{shifts[0]['id']}", headers=worker).status_code == 403
        assert client.delete(f"/api/schedule/{shifts[0]['id']}", headers=admin).status_code == 200

    def test_guests_locked_out(self, client, guest):
        assert client.get("/api/schedule", headers=guest).status_code == 403


class TestTablesProductsRestaurants:

    def test_tables(self, client, admin, worker):
        response = client.post("/api/table", json={"number": 4, "status": "free"}, headers=admin)
        assert response.status_code == 201
        table_id = response.json()["id"]

        assert client.post("/api/table", json={"number": 4, "status": "free"}, headers=admin).status_code == 400
        assert client.put(f"/api/table/{table_id}", json={"number": 4, "status": "busy"}, headers=worker).status_code == 200
        assert client.get("/api/table", headers=worker).json()[0]["status"] == "busy"
        assert client.delete(f"/api/table/{table_id}", headers=worker).status_code == 403

    def test_products(self, client, admin, worker):
        response = client.post("/api/product", json={"name": "Flour", "amount": 12.5}, headers=admin)
        assert response.status_code == 201
        product_id = response.json()["id"]
        assert client.get(f"/api/product/{product_id}", headers=worker).json()["amount"] == 12.5
        assert client.post("/api/product", json={"name": "Salt", "amount": 0}, headers=admin).status_code == 400

    def test_restaurants(self, client, admin, worker):
        restaurant = {
            "name": "Tastify Podil",
            "address": "Sahaidachnoho St, 25",
            "email": "podil@tastify.com.ua",
            "cuisine": ["ukrainian"],
        }
        response = client.post("/api/restaurant", json=restaurant, headers=admin)
        assert response.status_code == 201
        restaurant_id = response.json()["id"]

        assert client.get(f"/api/restaurant/{restaurant_id}", headers=worker).status_code == 403
        assert client.get(f"/api/restaurant/{restaurant_id}", headers=admin).json()["name"] == "Tastify Podil"
        assert client.post("/api/restaurant", json={**restaurant, "cuisine": []}, headers=admin).status_code == 400


class TestInfrastructure:

    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_database_not_configured(self, admin):
        saved, database.db = database.db, None
        try:
            response = TestClient(app).get("/api/table", headers=admin)
        finally:
            database.db = saved
        assert response.status_code == 500

    def test_database_failure_is_server_error(self, admin):
        class BrokenDatabase:
            def __getitem__(self, name):
                raise ServerSelectionTimeoutError("no servers")

        app.dependency_overrides[get_db] = lambda: BrokenDatabase()
        try:
            response = TestClient(app).get("/api/table", headers=admin)
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 500
        assert response.json()["detail"] == "Database error"
