from tests.conftest import create_machine, generate_tags


class TestTagGeneration:
    async def test_generate_batch(self, client):
        tags = await generate_tags(client, count=5)
        assert len(tags) == 5
        assert len({t["token"] for t in tags}) == 5
        for tag in tags:
            assert tag["status"] == "unlinked"
            assert tag["machineId"] is None
            assert tag["linkedAt"] is None
            assert tag["scanUrl"] == f"https://inventory.example.com/m/{tag['token']}"

    async def test_max_batch(self, client):
        tags = await generate_tags(client, count=100)
        assert len({t["token"] for t in tags}) == 100

    async def test_count_out_of_range(self, client):
        for count in (0, -3, 101):
            response = await client.post("/api/tags/generate", json={"count": count})
            assert response.status_code == 400
            assert response.json() == {"error": "Count must be between 1 and 100"}
        assert (await client.get("/api/tags")).json() == []

    async def test_count_not_a_number(self, client):
        response = await client.post("/api/tags/generate", json={"count": "lots"})
        assert response.status_code == 400

    async def test_list_by_status(self, client):
        tags = await generate_tags(client, count=3)
        machine = await create_machine(client)
        await client.post(f"/api/tags/{tags[0]['token']}/link", json={"machineId": machine["_id"]})

        linked = (await client.get("/api/tags", params={"status": "linked"})).json()
        unlinked = (await client.get("/api/tags", params={"status": "unlinked"})).json()
        assert [t["token"] for t in linked] == [tags[0]["token"]]
        assert len(unlinked) == 2

    async def test_qr_image(self, client):
        tag = (await generate_tags(client))[0]
        response = await client.get(f"/api/tags/{tag['token']}/qr.png")
        assert response.status_code == 200
        assert response.content.startswith(b"\x89PNG")
        assert (await client.get("/api/tags/unknown/qr.png")).status_code == 404


class TestLinking:
    async def test_link_and_unlink(self, client):
        tag = (await generate_tags(client))[0]
        machine = await create_machine(client, machineId="M1")

        response = await client.post(f"/api/tags/{tag['token']}/link", json={"machineId": "M1"})
        assert response.status_code == 200
        linked = response.json()
        assert linked["status"] == "linked"
        assert linked["machineId"] == machine["_id"]
        assert linked["machine"]["machineId"] == "M1"
        assert linked["linkedAt"]

        assert (await client.get(f"/api/machines/{machine['_id']}")).json()["assetTag"] == tag["token"]

        response = await client.post(f"/api/tags/{tag['token']}/unlink")
        assert response.status_code == 200
        unlinked = response.json()
        assert unlinked["status"] == "unlinked"
        assert unlinked["machineId"] is None
        assert unlinked["linkedAt"] is None
        assert (await client.get(f"/api/machines/{machine['_id']}")).json()["assetTag"] is None

    async def test_relink_after_unlink(self, client):
        tag = (await generate_tags(client))[0]
        m1 = await create_machine(client, machineId="M1")
        m2 = await create_machine(client, machineId="M2")

        await client.post(f"/api/tags/{tag['token']}/link", json={"machineId": m1["_id"]})
        await client.post(f"/api/tags/{tag['token']}/unlink")
        response = await client.post(f"/api/tags/{tag['token']}/link", json={"machineId": m2["_id"]})
        assert response.status_code == 200
        assert response.json()["machineId"] == m2["_id"]

    async def test_linked_tag_cannot_be_relinked(self, client):
        tag = (await generate_tags(client))[0]
        m1 = await create_machine(client, machineId="M1")
        m2 = await create_machine(client, machineId="M2")
        await client.post(f"/api/tags/{tag['token']}/link", json={"machineId": m1["_id"]})

        response = await client.post(f"/api/tags/{tag['token']}/link", json={"machineId": m2["_id"]})
        assert response.status_code == 409
        assert response.json() == {"error": "Tag is already linked to a machine"}

        listed = (await client.get("/api/tags")).json()
        assert listed[0]["machineId"] == m1["_id"]

    async def test_machine_holds_one_tag(self, client):
        first, second = await generate_tags(client, count=2)
        machine = await create_machine(client)
        await client.post(f"/api/tags/{first['token']}/link", json={"machineId": machine["_id"]})

        response = await client.post(f"/api/tags/{second['token']}/link", json={"machineId": machine["_id"]})
        assert response.status_code == 409
        assert response.json() == {"error": "Machine already has a tag linked"}

    async def test_unlink_unlinked_tag(self, client):
        tag = (await generate_tags(client))[0]
        response = await client.post(f"/api/tags/{tag['token']}/unlink")
        assert response.status_code == 409
        assert response.json() == {"error": "Tag is not linked"}

    async def test_link_unknown_tag_or_machine(self, client):
        machine = await create_machine(client)
        response = await client.post("/api/tags/nope/link", json={"machineId": machine["_id"]})
        assert response.status_code == 404
        assert response.json() == {"error": "Tag not found"}

        tag = (await generate_tags(client))[0]
        response = await client.post(f"/api/tags/{tag['token']}/link", json={"machineId": "ghost"})
        assert response.status_code == 404
        assert response.json() == {"error": "Machine not found"}


class TestCreateMachineFromTag:
    async def test_creates_and_links(self, client):
        tag = (await generate_tags(client))[0]
        response = await client.post(
            f"/api/tags/{tag['token']}/create-machine",
            json={"machineId": "M9", "manufacturer": "Aristocrat"},
        )
        assert response.status_code == 201
        machine = response.json()
        assert machine["machineId"] == "M9"
        assert machine["assetTag"] == tag["token"]

        listed = (await client.get("/api/tags")).json()
        assert listed[0]["status"] == "linked"
        assert listed[0]["machineId"] == machine["_id"]

    async def test_duplicate_machine_id_leaves_nothing_behind(self, client):
        await create_machine(client, machineId="M1")
        tag = (await generate_tags(client))[0]

        response = await client.post(f"/api/tags/{tag['token']}/create-machine", json={"machineId": "M1"})
        assert response.status_code == 400

        assert len((await client.get("/api/machines")).json()) == 1
        assert (await client.get("/api/tags")).json()[0]["status"] == "unlinked"

    async def test_already_linked_tag(self, client):
        tag = (await generate_tags(client))[0]
        await client.post(f"/api/tags/{tag['token']}/create-machine", json={"machineId": "M1"})

        response = await client.post(f"/api/tags/{tag['token']}/create-machine", json={"machineId": "M2"})
        assert response.status_code == 409
        assert len((await client.get("/api/machines")).json()) == 1


class TestPublicTagView:
    async def test_unlinked_tag(self, anon_client, client):
        tag = (await generate_tags(client))[0]
        response = await anon_client.get(f"/api/tags/{tag['token']}")
        assert response.status_code == 200
        assert response.json() == {"token": tag["token"], "status": "unlinked"}

    async def test_linked_tag_hides_credentials_from_anonymous(self, anon_client, client):
        tag = (await generate_tags(client))[0]
        await client.post(
            f"/api/tags/{tag['token']}/create-machine",
            json={"machineId": "M1", "displayName": "Lucky Sevens", "credentials": {"lockPin": "2468"}},
        )

        public = (await anon_client.get(f"/api/tags/{tag['token']}")).json()
        assert public["status"] == "linked"
        assert public["machine"]["machineId"] == "M1"
        assert public["machine"]["displayName"] == "Lucky Sevens"
        assert "credentials" not in public["machine"]

        private = (await client.get(f"/api/tags/{tag['token']}")).json()
        assert private["machine"]["credentials"] == {"lockPin": "2468"}

    async def test_asset_tag_resolves_through_by_token(self, anon_client, client):
        tag = (await generate_tags(client))[0]
        await client.post(f"/api/tags/{tag['token']}/create-machine", json={"machineId": "M1"})

        response = await anon_client.get(f"/api/machines/by-token/{tag['token']}")
        assert response.status_code == 200
        assert response.json()["machine"]["machineId"] == "M1"

    async def test_unknown_token(self, anon_client):
        response = await anon_client.get("/api/tags/unknown")
        assert response.status_code == 404

    async def test_bad_token_on_authenticated_client_still_404(self, client):
        assert (await client.get("/api/tags/unknown")).status_code == 404
