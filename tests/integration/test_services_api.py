"""Test the public service catalog."""
from booking_api.models import Services


def add_services(db):
    db.add_all([
        Services(id=1, name="Massage", description="60 min", price=80, availability=1),
        Services(id=2, name="Consultation", price=0, availability=1),
        Services(id=3, name=None, price=15, availability=1),
        Services(id=4, name="Acupuncture", price=95.5, availability=0),
        Services(id=5, name="Consultation", price=40, availability=1),
    ])
    db.commit()


class TestListServices:

    def test_only_available_sorted_by_name_then_id(self, client, db_session):
        add_services(db_session)

        response = client.get("/services/")

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [2, 5, 1, 3]

    def test_list_item_shape(self, client, db_session):
        add_services(db_session)

        first = client.get("/services/").json()[0]

        assert first == {"id": 2, "name": "Consultation", "description": None, "price": 0.0}

    def test_public_cache_header(self, client):
        response = client.get("/services/")

        assert response.json() == []
        assert response.headers["cache-control"] == "public, max-age=60"


class TestGetService:

    def test_available_service(self, client, db_session):
        add_services(db_session)

        body = client.get("/services/1").json()

        assert body == {
            "id": 1,
            "name": "Massage",
            "description": "60 min",
            "price": 80.0,
            "availability": True,
        }

    def test_unavailable_service_is_404(self, client, db_session):
        add_services(db_session)

        assert client.get("/services/4").status_code == 404

    def test_missing_service_is_404(self, client):
        assert client.get("/services/99").status_code == 404

    def test_non_positive_id_is_400(self, client):
        assert client.get("/services/0").status_code == 400
