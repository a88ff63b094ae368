from stampit.models.account import Account
from stampit.models.business import Business
from stampit.models.customer import Customer


def _headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_business_sign_up_creates_account_and_profile(client, db_session):
    response = client.post(
        "/auth/business/sign-up",
        json={
            "email": "Owner@Example.com",
            "password": "secret123",
            "business_name": "Sunset Salon",
            "business_type": "Salon",
            "phone": "555-1000",
            "address": "1 Main St",
        },
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["role"] == "business"
    assert body["business"]["business_name"] == "Sunset Salon"

    account = db_session.query(Account).one()
    assert account.email == "owner@example.com"
    business = db_session.query(Business).one()
    assert business.user_id == account.id


def test_business_name_is_required(client, db_session):
    response = client.post(
        "/auth/business/sign-up",
        json={"email": "a@example.com", "password": "secret123", "business_name": ""},
    )

    assert response.status_code == 422
    assert db_session.query(Account).count() == 0


def test_duplicate_email_is_rejected(client, business_token):
    response = client.post(
        "/auth/business/sign-up",
        json={"email": "owner@example.com", "password": "secret123", "business_name": "Other"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "User already registered"


def test_sign_in(client, business_token):
    ok = client.post("/auth/business/sign-in", json={"email": "owner@example.com", "password": "secret123"})
    bad = client.post("/auth/business/sign-in", json={"email": "owner@example.com", "password": "nope"})

    assert ok.status_code == 200
    assert ok.json()["role"] == "business"
    assert bad.status_code == 400
    assert bad.json()["detail"] == "Invalid login credentials"


def test_session_reports_dashboard_screen(client, business_token, customer_token):
    business_session = client.get("/auth/session", headers=_headers(business_token)).json()
    customer_session = client.get("/auth/session", headers=_headers(customer_token)).json()

    assert business_session["role"] == "business"
    assert business_session["screen"] == "business_dashboard"
    assert customer_session["role"] == "customer"
    assert customer_session["phone"] == "555-0199"
    assert customer_session["screen"] == "customer_dashboard"


def test_no_session_is_null(client):
    assert client.get("/auth/session").json() is None
    assert client.get("/auth/session", headers=_headers("garbage")).json() is None


def test_sign_out_revokes_session(client, customer_token):
    response = client.post("/auth/sign-out", headers=_headers(customer_token))

    assert response.status_code == 200
    assert response.json() == {"signedOut": True, "screen": "landing"}
    assert client.get("/auth/session", headers=_headers(customer_token)).json() is None
    assert client.get("/customers/me", headers=_headers(customer_token)).status_code == 401


def test_sign_out_requires_session(client):
    assert client.post("/auth/sign-out").status_code == 401


def test_customer_sign_in_is_find_or_create(client, db_session):
    first = client.post("/auth/customer", json={"phone": "555-0150", "name": "Ada"})
    second = client.post("/auth/customer", json={"phone": "555-0150", "name": "Other"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["customer"]["id"] == second.json()["customer"]["id"]
    assert second.json()["customer"]["name"] == "Ada"
    assert db_session.query(Customer).count() == 1


def test_customer_without_name_is_stored_as_null(client):
    response = client.post("/auth/customer", json={"phone": "555-0151"})

    assert response.json()["customer"]["name"] is None


def test_roles_are_enforced(client, business_token, customer_token):
    assert client.get("/businesses/me", headers=_headers(customer_token)).status_code == 403
    assert client.get("/customers/me", headers=_headers(business_token)).status_code == 403
    assert client.get("/businesses/me").status_code == 401
