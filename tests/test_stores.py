from tests.conftest import create_machine, create_store


class TestStoreCrud:
    async def test_store_lifecycle_returns_machines_to_warehouse(self, client):
        store = await create_store(client, storeId="S1", name="Main St")
        machine = await create_machine(client, machineId="M1", storeId="S1")

        detail = (await client.get(f"/api/stores/{store['_id']}")).json()
        assert [m["machineId"] for m in detail["machines"]] == ["M1"]
        assert detail["machines"][0]["venueName"] == "Main St"

        response = await client.delete(f"/api/stores/{store['_id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        after = (await client.get(f"/api/machines/{machine['_id']}")).json()
        assert after["storeId"] is None
        assert after["venueName"] is None
        assert after["currentLocation"] == "warehouse"
        assert (await client.get(f"/api/stores/{store['_id']}")).status_code == 404

    async def test_delete_unassigns_every_machine(self, client):
        store = await create_store(client)
        for n in range(3):
            await create_machine(client, machineId=f"M{n}", storeId=store["_id"])
        await create_machine(client, machineId="elsewhere")

        await client.delete(f"/api/stores/{store['_id']}")

        machines = (await client.get("/api/machines")).json()
        assert len(machines) == 4
        assert all(m["storeId"] is None for m in machines)
        assert all(m["currentLocation"] == "warehouse" for m in machines)

    async def test_duplicate_store_id(self, client):
        await create_store(client, storeId="S1")
        response = await client.post("/api/stores", json={"storeId": "S1", "name": "Other"})
        assert response.status_code == 400
        assert response.json() == {"error": "Store ID already exists"}

    async def test_name_required(self, client):
        response = await client.post("/api/stores", json={"storeId": "S1"})
        assert response.status_code == 400
        response = await client.post("/api/stores", json={"storeId": "S1", "name": "  "})
        assert response.status_code == 400

    async def test_listed_by_name(self, client):
        await create_store(client, storeId="S1", name="Zephyr Lounge")
        await create_store(client, storeId="S2", name="Acme Bar")
        await create_store(client, storeId="S3", name="Main St")

        names = [s["name"] for s in (await client.get("/api/stores")).json()]
        assert names == ["Acme Bar", "Main St", "Zephyr Lounge"]

    async def test_contact_fields(self, client):
        store = await create_store(
            client,
            address="1 Main St",
            contactName="Pat",
            contactPhone="555-0100",
            contactEmail="pat@example.com",
            accessNotes="Back door after 6pm",
        )
        assert store["contactEmail"] == "pat@example.com"
        assert store["accessNotes"] == "Back door after 6pm"

    async def test_blank_email_allowed(self, client):
        store = await create_store(client, contactEmail="")
        assert store["contactEmail"] is None

    async def test_invalid_email(self, client):
        response = await client.post("/api/stores", json={"storeId": "S1", "name": "A", "contactEmail": "nope"})
        assert response.status_code == 400

    async def test_update(self, client):
        store = await create_store(client)
        response = await client.put(f"/api/stores/{store['_id']}", json={"notes": "Closed Mondays"})
        assert response.status_code == 200
        body = response.json()
        assert body["notes"] == "Closed Mondays"
        assert body["name"] == "Main St"

    async def test_update_to_taken_store_id(self, client):
        await create_store(client, storeId="S1")
        second = await create_store(client, storeId="S2", name="Second")
        response = await client.put(f"/api/stores/{second['_id']}", json={"storeId": "S1"})
        assert response.status_code == 400

    async def test_missing_store(self, client):
        assert (await client.get("/api/stores/nope")).status_code == 404
        assert (await client.put("/api/stores/nope", json={"notes": "x"})).status_code == 404
        response = await client.delete("/api/stores/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Store not found"}

    async def test_rename_moves_machine_locations(self, client):
        store = await create_store(client, storeId="S1", name="Main St")
        follows = await create_machine(client, machineId="M1", storeId="S1")
        custom = await create_machine(client, machineId="M2", storeId="S1", currentLocation="Back room")

        response = await client.put(f"/api/stores/{store['_id']}", json={"name": "Main Street Tavern"})
        assert response.status_code == 200

        renamed = (await client.get(f"/api/machines/{follows['_id']}")).json()
        assert renamed["currentLocation"] == "Main Street Tavern"
        assert renamed["venueName"] == "Main Street Tavern"
        kept = (await client.get(f"/api/machines/{custom['_id']}")).json()
        assert kept["currentLocation"] == "Back room"
