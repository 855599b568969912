PASSWORD = "secret"


def login(client, username, password=PASSWORD):
    return client.post("/login", data={"username": username, "password": password})


def driver_headers(client, username="driver1"):
    r = client.post("/api/driver/login", json={"username": username, "password": PASSWORD})
    assert r.status_code == 200, r.data
    return {"Authorization": f"Bearer {r.get_json()['token']}"}


def admin_headers(client):
    r = client.post("/api/auth/login", json={"username": "admin", "password": PASSWORD})
    assert r.status_code == 200, r.data
    return {"Authorization": f"Bearer {r.get_json()['token']}"}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeGateway:
    """Stands in for requests.post; answers by MyFatoorah endpoint path."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def reply(self, path, payload, status_code=200):
        self.responses[path] = FakeResponse(payload, status_code)

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        for path, response in self.responses.items():
            if url.endswith(path):
                return response
        raise AssertionError(f"Unexpected gateway call {url}")

    def paths(self):
        return [c["url"].rsplit("/", 1)[-1] for c in self.calls]
