"""Provisioning list API tests."""

import csv
import io


def test_create_list(client, auth_headers):
    """Test creating a list."""
    response = client.post(
        "/api/provisioning-lists",
        headers=auth_headers,
        json={"name": "Charter Prep", "description": "7 days, 8 guests"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Charter Prep"
    assert data["status"] == "DRAFT"
    assert data["items"] == []


def test_get_lists(client, auth_headers, make_list):
    make_list(auth_headers, name="First")
    make_list(auth_headers, name="Second")

    response = client.get("/api/provisioning-lists", headers=auth_headers)
    assert response.status_code == 200
    assert {lst["name"] for lst in response.json()} == {"First", "Second"}


def test_status_moves_freely(client, auth_headers, make_list):
    """Any status may follow any other, including going back to DRAFT."""
    lst = make_list(auth_headers)
    for new_status in ["COMPLETED", "DRAFT", "ARCHIVED", "ACTIVE"]:
        response = client.patch(
            f"/api/provisioning-lists/{lst['id']}", headers=auth_headers, json={"status": new_status}
        )
        assert response.status_code == 200
        assert response.json()["status"] == new_status


def test_invalid_status_rejected(client, auth_headers, make_list):
    lst = make_list(auth_headers)
    response = client.patch(
        f"/api/provisioning-lists/{lst['id']}", headers=auth_headers, json={"status": "SHIPPED"}
    )
    assert response.status_code == 422


def test_delete_list_removes_items(client, auth_headers, make_list, add_list_item):
    lst = make_list(auth_headers)
    item = add_list_item(auth_headers, lst["id"], name="Eggs", quantity=3, unit="dozen")

    response = client.delete(f"/api/provisioning-lists/{lst['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/api/provisioning-lists/{lst['id']}", headers=auth_headers).status_code == 404
    assert (
        client.patch(
            f"/api/provisioning-lists/{lst['id']}/items/{item['id']}",
            headers=auth_headers,
            json={"quantity": 1},
        ).status_code
        == 404
    )


def test_other_users_list_not_found(client, auth_headers, other_headers, make_list):
    lst = make_list(auth_headers)
    assert client.get(f"/api/provisioning-lists/{lst['id']}", headers=other_headers).status_code == 404
    assert (
        client.post(
            f"/api/provisioning-lists/{lst['id']}/items",
            headers=other_headers,
            json={"name": "Eggs", "category": "FOOD", "quantity": 1, "unit": "dozen"},
        ).status_code
        == 404
    )
    assert client.get("/api/provisioning-lists", headers=other_headers).json() == []


class TestListItems:
    def test_add_item_defaults_to_trip(self, client, auth_headers, make_list, add_list_item):
        lst = make_list(auth_headers)
        item = add_list_item(
            auth_headers,
            lst["id"],
            name="Champagne",
            category="BEVERAGES",
            quantity=6,
            unit="bottles",
        )
        assert item["item_type"] == "trip"
        assert item["purchased"] is False
        assert item["purchased_at"] is None

    def test_update_item(self, client, auth_headers, make_list, add_list_item):
        lst = make_list(auth_headers)
        item = add_list_item(auth_headers, lst["id"], name="Eggs", quantity=3, unit="dozen")

        response = client.patch(
            f"/api/provisioning-lists/{lst['id']}/items/{item['id']}",
            headers=auth_headers,
            json={"quantity": 4, "item_type": "restock"},
        )
        assert response.status_code == 200
        assert response.json()["quantity"] == 4
        assert response.json()["item_type"] == "restock"
        assert response.json()["name"] == "Eggs"

    def test_delete_item(self, client, auth_headers, make_list, add_list_item):
        lst = make_list(auth_headers)
        item = add_list_item(auth_headers, lst["id"], name="Eggs", quantity=3, unit="dozen")

        response = client.delete(
            f"/api/provisioning-lists/{lst['id']}/items/{item['id']}", headers=auth_headers
        )
        assert response.status_code == 204
        lst = client.get(f"/api/provisioning-lists/{lst['id']}", headers=auth_headers).json()
        assert lst["items"] == []

    def test_item_on_another_list_not_found(self, client, auth_headers, make_list, add_list_item):
        first = make_list(auth_headers, name="First")
        second = make_list(auth_headers, name="Second")
        item = add_list_item(auth_headers, first["id"], name="Eggs", quantity=3, unit="dozen")

        response = client.delete(
            f"/api/provisioning-lists/{second['id']}/items/{item['id']}", headers=auth_headers
        )
        assert response.status_code == 404


class TestAddRestockItems:
    def test_adds_shortfalls_once(self, client, auth_headers, make_inventory, make_list):
        """Running the generator twice adds nothing the second time."""
        make_inventory(
            auth_headers,
            name="Water",
            category="BEVERAGES",
            quantity=24,
            target_quantity=48,
            unit="bottles",
        )
        make_inventory(auth_headers, name="Lemons", quantity=5, target_quantity=10, unit="pcs")
        lst = make_list(auth_headers)

        url = f"/api/provisioning-lists/{lst['id']}/add-restock-items"
        first = client.post(url, headers=auth_headers)
        assert first.status_code == 200
        assert first.json()["added"] == 2
        assert all(item["item_type"] == "restock" for item in first.json()["list"]["items"])

        second = client.post(url, headers=auth_headers)
        assert second.json()["added"] == 0
        assert len(second.json()["list"]["items"]) == 2

    def test_skips_identity_already_on_list(self, client, auth_headers, make_inventory, make_list, add_list_item):
        """A hand-added line with the same identity blocks the restock line."""
        make_inventory(auth_headers, name="Lemons", quantity=5, target_quantity=10, unit="pcs")
        lst = make_list(auth_headers)
        add_list_item(auth_headers, lst["id"], name="Lemons", quantity=2, unit="pcs")

        response = client.post(
            f"/api/provisioning-lists/{lst['id']}/add-restock-items", headers=auth_headers
        )
        assert response.json()["added"] == 0
        items = response.json()["list"]["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 2

    def test_different_unit_is_a_different_line(self, client, auth_headers, make_inventory, make_list, add_list_item):
        make_inventory(auth_headers, name="Lemons", quantity=0, target_quantity=1, unit="kg")
        lst = make_list(auth_headers)
        add_list_item(auth_headers, lst["id"], name="Lemons", quantity=2, unit="pcs")

        response = client.post(
            f"/api/provisioning-lists/{lst['id']}/add-restock-items", headers=auth_headers
        )
        assert response.json()["added"] == 1


class TestAddMealItems:
    def test_adds_only_missing_quantities(self, client, auth_headers, make_inventory, make_meal, make_list):
        """Ingredients partly on hand get the remainder; fully stocked ones are skipped."""
        make_inventory(auth_headers, name="Pasta", quantity=0.2, unit="kg")
        make_inventory(auth_headers, name="Basil", quantity=1, unit="bunch")
        meal = make_meal(
            auth_headers,
            "Pasta Night",
            [
                {"name": "pasta", "category": "FOOD", "quantity": 0.5, "unit": "kg"},
                {"name": "Basil", "category": "FOOD", "quantity": 1, "unit": "bunch"},
                {"name": "Parmesan", "category": "FOOD", "quantity": 0.1, "unit": "kg"},
            ],
        )
        lst = make_list(auth_headers)

        response = client.post(
            f"/api/provisioning-lists/{lst['id']}/add-meal-items",
            headers=auth_headers,
            json={"meal_id": meal["id"]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["added"] == 2
        assert data["meal_name"] == "Pasta Night"
        lines = {item["name"]: item for item in data["list"]["items"]}
        assert set(lines) == {"pasta", "Parmesan"}
        assert lines["pasta"]["quantity"] == 0.3
        assert lines["pasta"]["item_type"] == "trip"
        assert lines["Parmesan"]["quantity"] == 0.1

    def test_repeat_adds_nothing(self, client, auth_headers, make_meal, make_list):
        meal = make_meal(
            auth_headers, "Toast", [{"name": "Bread", "category": "FOOD", "quantity": 1, "unit": "loaves"}]
        )
        lst = make_list(auth_headers)
        url = f"/api/provisioning-lists/{lst['id']}/add-meal-items"

        assert client.post(url, headers=auth_headers, json={"meal_id": meal["id"]}).json()["added"] == 1
        assert client.post(url, headers=auth_headers, json={"meal_id": meal["id"]}).json()["added"] == 0

    def test_mixed_case_ingredients_share_stock(
        self, client, auth_headers, make_inventory, make_meal, make_list
    ):
        make_inventory(auth_headers, name="Eggs", quantity=6, unit="pcs")
        meal = make_meal(
            auth_headers,
            "Omelette Brunch",
            [
                {"name": "Eggs", "category": "FOOD", "quantity": 4, "unit": "pcs"},
                {"name": "eggs", "category": "FOOD", "quantity": 4, "unit": "pcs"},
            ],
        )
        lst = make_list(auth_headers)

        data = client.post(
            f"/api/provisioning-lists/{lst['id']}/add-meal-items",
            headers=auth_headers,
            json={"meal_id": meal["id"]},
        ).json()
        assert data["added"] == 1
        [line] = data["list"]["items"]
        assert line["name"] == "Eggs"
        assert line["quantity"] == 2

    def test_other_users_meal_not_found(self, client, auth_headers, other_headers, make_meal, make_list):
        meal = make_meal(
            other_headers, "Toast", [{"name": "Bread", "category": "FOOD", "quantity": 1, "unit": "loaves"}]
        )
        lst = make_list(auth_headers)

        response = client.post(
            f"/api/provisioning-lists/{lst['id']}/add-meal-items",
            headers=auth_headers,
            json={"meal_id": meal["id"]},
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Meal not found"


def test_export_csv(client, auth_headers, make_list, add_list_item):
    """Every value is double-quoted, with a header row."""
    lst = make_list(auth_headers)
    add_list_item(
        auth_headers,
        lst["id"],
        name='Wine, "Red"',
        category="BEVERAGES",
        quantity=6,
        unit="bottles",
    )
    add_list_item(
        auth_headers,
        lst["id"],
        name="Flour",
        quantity=2.5,
        unit="kg",
        item_type="restock",
    )

    response = client.get(f"/api/provisioning-lists/{lst['id']}/export", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]

    lines = response.text.splitlines()
    assert lines[0] == '"Name","Category","Quantity","Unit","Type","Purchased","Purchased At"'
    assert lines[1] == '"Wine, ""Red""","BEVERAGES","6","bottles","trip","No",""'
    assert lines[2] == '"Flour","FOOD","2.5","kg","restock","No",""'

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[1][0] == 'Wine, "Red"'


def test_export_other_users_list(client, auth_headers, other_headers, make_list):
    lst = make_list(auth_headers)
    response = client.get(f"/api/provisioning-lists/{lst['id']}/export", headers=other_headers)
    assert response.status_code == 404
