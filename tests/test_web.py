import pytest

from payoff_calc_web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_index_renders_form(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    for mode in ("minpay", "payseries", "nextbal", "bipay", "compare"):
        assert f'value="{mode}"' in body


def test_index_runs_selected_mode(client):
    response = client.post(
        "/", data={"principal": "5500", "interest": "12", "month": "1", "mode": "nextbal"}
    )
    body = response.get_data(as_text=True)
    assert "Principal: $ 5,500.00" in body
    assert "Interest: $ 35.93" in body


def test_index_shows_errors(client):
    response = client.post("/", data={"principal": "lots", "mode": "nextbal"})
    assert response.status_code == 200
    assert "Invalid amount: lots" in response.get_data(as_text=True)


def test_api_help(client):
    response = client.post("/api/help")
    assert response.get_json()["ok"] is True
    assert "minpay:" in response.get_json()["output"]


def test_api_nextbal_accepts_json(client):
    response = client.post("/api/nextbal", json={"principal": "5500", "interest": 12, "month": 1})
    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "output": "Principal: $ 5,500.00\nInterest: $ 35.93"}


def test_api_minpay(client):
    response = client.post(
        "/api/minpay", data={"principal": "5500", "interest": "12", "month": "1", "months": "12"}
    )
    assert response.status_code == 200
    assert "to be paid off in 12 months" in response.get_json()["output"]


def test_api_payseries_run_all(client):
    response = client.post(
        "/api/payseries",
        json={"principal": "100", "month": 1, "payment": "60", "months": 5, "stop_on_payoff": "no"},
    )
    assert "Balance in 5 month(s)" in response.get_json()["output"]


@pytest.mark.parametrize(
    "path,payload,error_type",
    [
        ("/api/bogus", {"principal": "5500"}, "UNRECOGNIZED_MODE"),
        ("/api/nextbal", {"principal": "5500", "month": "13"}, "INVALID_MONTH"),
        ("/api/payseries", {"principal": "5500", "months": "3"}, "MALFORMED_AMOUNT"),
        ("/api/nextbal", {"principal": "five"}, "MALFORMED_AMOUNT"),
        (
            "/api/minpay",
            {"principal": "100", "interest": "500", "month": "1", "months": "1"},
            "SEARCH_DID_NOT_CONVERGE",
        ),
    ],
)
def test_api_failures(client, path, payload, error_type):
    response = client.post(path, json=payload)
    assert response.status_code == 400
    data = response.get_json()
    assert data["ok"] is False
    assert data["error_type"] == error_type


@pytest.mark.parametrize("payload", [["x"], "5500", 42])
def test_api_rejects_json_that_is_not_an_object(client, payload):
    response = client.post("/api/nextbal", json=payload)
    assert response.status_code == 400
    data = response.get_json()
    assert data["ok"] is False
    assert data["error_type"] == "MALFORMED_AMOUNT"
