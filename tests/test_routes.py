async def create_user(client, email="student@example.com"):
    response = await client.post("/users/", json={
        "name": "Student", "email": email, "password": "password123", "role": "student",
    })
    assert response.status_code == 201
    return response.json()


async def create_equipment(client, **fields):
    payload = {"name": "Laptop", "tag": "LAP001", "condition": "Good",
               "total_quantity": 10, "available_quantity": 8}
    payload.update(fields)
    response = await client.post("/equipment/", json=payload)
    assert response.status_code == 201
    return response.json()


class TestHealthCheck:

    async def test_health_check(self, client):
        response = await client.get("/health_check/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestUserRoutes:

    async def test_create_and_read(self, client):
        user = await create_user(client)
        assert "password" not in user

        response = await client.get(f"/users/{user['id']}")
        assert response.json()["email"] == "student@example.com"

        response = await client.get("/users/by-email/student@example.com")
        assert response.json()["id"] == user["id"]

    async def test_duplicate_email(self, client):
        await create_user(client)
        response = await client.post("/users/", json={
            "name": "Again", "email": "student@example.com", "password": "password123",
        })
        assert response.status_code == 400

    async def test_missing_user(self, client):
        response = await client.get("/users/42")
        assert response.status_code == 404


class TestEquipmentRoutes:

    async def test_search_with_filters(self, client):
        await create_equipment(client)
        await create_equipment(client, name="Projector", tag="PRJ001", total_quantity=4, available_quantity=3)

        response = await client.get("/equipment/", params={"name": "Lap", "condition": "Good"})

        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Laptop"]

    async def test_search_sentinels(self, client):
        await create_equipment(client)
        response = await client.get("/equipment/", params={
            "name": "", "condition": "All", "availablequantity": "undefined",
        })
        assert len(response.json()) == 1

    async def test_search_bad_bound(self, client):
        response = await client.get("/equipment/", params={"availablequantity": "many"})
        assert response.status_code == 400

    async def test_replace_creates_then_updates(self, client):
        response = await client.put("/equipment/7", json={
            "name": "Tripod", "tag": "TRI001", "condition": "Fair",
            "total_quantity": 2, "available_quantity": 2,
        })
        assert response.status_code == 200
        assert response.json()["id"] == 7

        response = await client.put("/equipment/7", json={"available_quantity": 1})
        body = response.json()
        assert (body["name"], body["available_quantity"], body["total_quantity"]) == ("Tripod", 1, 2)

    async def test_replace_invalid_quantities(self, client):
        equipment = await create_equipment(client)
        response = await client.put(f"/equipment/{equipment['id']}", json={"available_quantity": 50})
        assert response.status_code == 400

    async def test_replace_null_quantity(self, client):
        equipment = await create_equipment(client)
        response = await client.put(f"/equipment/{equipment['id']}", json={"available_quantity": None})
        assert response.status_code == 400

        response = await client.get(f"/equipment/{equipment['id']}")
        assert response.json()["available_quantity"] == 8

    async def test_replace_null_name(self, client):
        equipment = await create_equipment(client)
        response = await client.put(f"/equipment/{equipment['id']}", json={"name": None})
        assert response.status_code == 400

    async def test_search_oversized_bound(self, client):
        await create_equipment(client)
        response = await client.get("/equipment/", params={"availablequantity": "99999999999999999999"})
        assert response.status_code == 400


class TestBorrowRequestRoutes:

    async def test_request_lifecycle(self, client):
        user = await create_user(client)
        laptop = await create_equipment(client)

        response = await client.post("/borrow-requests/", json={
            "user_id": user["id"],
            "items": [{"equipment_id": laptop["id"], "quantity": 2,
                       "borrow_date": "2024-09-02", "return_date": "2024-09-09"}],
        })
        assert response.status_code == 201
        request = response.json()
        assert request["status"] == "pending"

        response = await client.get(f"/borrow-requests/{request['id']}/details")
        assert response.json() == [{
            "equipmentName": "Laptop",
            "equipmentTag": "LAP001",
            "borrowedQuantity": 2,
            "borrowDate": "2024-09-02",
            "returnDate": "2024-09-09",
        }]

        response = await client.get(f"/borrow-requests/user/{user['id']}")
        assert [r["id"] for r in response.json()] == [request["id"]]

        response = await client.patch(f"/borrow-requests/{request['id']}/status", json={"status": "approved"})
        assert response.status_code == 200
        assert response.json()["approval_date"] is not None

        response = await client.get(f"/equipment/{laptop['id']}")
        assert response.json()["available_quantity"] == 6

        response = await client.delete(f"/borrow-requests/{request['id']}")
        assert response.status_code == 409

        await client.patch(f"/borrow-requests/{request['id']}/status", json={"status": "returned"})
        response = await client.delete(f"/borrow-requests/{request['id']}")
        assert response.status_code == 200

    async def test_unknown_equipment_is_not_found(self, client):
        user = await create_user(client)
        response = await client.post("/borrow-requests/", json={
            "user_id": user["id"],
            "items": [{"equipment_id": 99, "quantity": 1,
                       "borrow_date": "2024-09-02", "return_date": "2024-09-09"}],
        })
        assert response.status_code == 404

        response = await client.get("/borrow-requests/")
        assert response.json() == []

    async def test_details_of_unknown_request(self, client):
        response = await client.get("/borrow-requests/123/details")
        assert response.status_code == 200
        assert response.json() == []

    async def test_add_item_to_request(self, client):
        user = await create_user(client)
        laptop = await create_equipment(client)
        projector = await create_equipment(client, name="Projector", tag="PRJ001",
                                           total_quantity=4, available_quantity=3)
        response = await client.post("/borrow-requests/", json={
            "user_id": user["id"],
            "items": [{"equipment_id": laptop["id"], "quantity": 1,
                       "borrow_date": "2024-09-02", "return_date": "2024-09-09"}],
        })
        request_id = response.json()["id"]

        response = await client.post("/borrow-items/", json={
            "borrow_request_id": request_id, "equipment_id": projector["id"], "quantity": 1,
            "borrow_date": "2024-09-02", "return_date": "2024-09-05",
        })
        assert response.status_code == 201

        response = await client.get(f"/borrow-requests/{request_id}/details")
        assert [row["equipmentTag"] for row in response.json()] == ["LAP001", "PRJ001"]
