"""Request helpers shared by the API tests."""


def allocate(client, user_id, bands, **extra):
    body = {
        "userId": user_id,
        "bands": bands,
        "name": "Asha",
        "zone": "Z1",
        "community": "North",
        **extra,
    }
    return client.post("/api/entries", json=body)


def list_entries(client, user_id="all", **params):
    return client.get("/api/entries", params={"userId": user_id, **params}).json()
