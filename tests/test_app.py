from food_ordering.models.restaurant import Restaurant


def test_unknown_api_route_is_json_404(client):
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_wrong_method_is_json_405(client):
    response = client.delete("/api/v1/user/login")

    assert response.status_code == 405
    assert response.get_json()["success"] is False


def test_frontend_not_built(client):
    assert client.get("/dashboard").status_code == 404


def test_frontend_fallback_serves_index(app, client, tmp_path):
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html>app</html>", encoding="utf-8")
    (dist / "assets" / "main.js").write_text("console.log('hi')", encoding="utf-8")

    assert b"app" in client.get("/").data
    assert b"app" in client.get("/restaurant/123").data
    assert b"console.log" in client.get("/assets/main.js").data


def test_unexpected_error_becomes_generic_500(owner, monkeypatch):
    def boom(user_id):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(Restaurant, "find_by_owner", staticmethod(boom))

    response = owner.get("/api/v1/restaurant")

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "code": "INTERNAL_ERROR",
        "message": "Internal server error",
    }


def test_cors_allows_client_origin(client):
    response = client.get("/api/v1/user/check-auth", headers={"Origin": "http://localhost:5173"})

    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
    assert response.headers["Access-Control-Allow-Credentials"] == "true"
