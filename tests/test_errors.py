from vdv_inventory.crud import machine as machine_crud


class TestUnexpectedErrors:
    async def test_generic_server_error(self, client, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("database password is hunter2")

        monkeypatch.setattr(machine_crud, "get_machines", broken)

        response = await client.get("/api/machines")
        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}
        assert "hunter2" not in response.text

    async def test_expected_errors_keep_their_status(self, client):
        response = await client.get("/api/machines/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Machine not found"}
