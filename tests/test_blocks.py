def create_block(client, headers, page_id, **fields):
    body = {"page_id": page_id, "type": "text", "content": {"text": "Mon premier block"}, "order_index": 0}
    body.update(fields)
    return client.post("/blocks", headers=headers, json=body)

# ========== TEST CREATE BLOCK ==========
def test_create_block_success(client, auth_headers, test_page):
    """Tester la création réussie d'un block"""
    response = create_block(client, auth_headers, test_page["id"])
    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "text"
    assert data["content"] == {"text": "Mon premier block"}
    assert data["order_index"] == 0
    assert data["page_id"] == test_page["id"]

def test_create_block_keeps_position(client, auth_headers, test_page):
    position = {"x": 200, "y": 220, "width": 400, "height": 150}
    response = create_block(client, auth_headers, test_page["id"], content={"text": "", "position": position})
    assert response.status_code == 201
    assert response.json()["content"]["position"] == position

def test_create_image_block_with_local_data(client, auth_headers, test_page):
    content = {"url": "", "localData": "data:image/png;base64,AAAA"}
    response = create_block(client, auth_headers, test_page["id"], type="image", content=content)
    assert response.status_code == 201
    assert response.json()["content"]["localData"] == "data:image/png;base64,AAAA"

def test_create_block_unknown_type(client, auth_headers, test_page):
    response = create_block(client, auth_headers, test_page["id"], type="heading")
    assert response.status_code == 422

def test_create_block_invalid_content(client, auth_headers, test_page):
    """Une position incomplète est rejetée"""
    response = create_block(client, auth_headers, test_page["id"], content={"text": "", "position": {"x": 1}})
    assert response.status_code == 422

def test_create_block_on_foreign_page(client, other_headers, test_page):
    response = create_block(client, other_headers, test_page["id"])
    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied"

# ========== TEST LIST BLOCKS ==========
def test_list_blocks_empty(client, auth_headers, test_page):
    response = client.get(f"/blocks/page/{test_page['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []

def test_list_blocks_ordered(client, auth_headers, test_page):
    """Tester que les blocks sont retournés ordonnés"""
    for order in (2, 0, 1):
        create_block(client, auth_headers, test_page["id"], order_index=order)

    data = client.get(f"/blocks/page/{test_page['id']}", headers=auth_headers).json()
    assert [b["order_index"] for b in data] == [0, 1, 2]

def test_list_blocks_foreign_page(client, other_headers, test_page):
    response = client.get(f"/blocks/page/{test_page['id']}", headers=other_headers)
    assert response.status_code == 403

# ========== TEST UPDATE BLOCK ==========
def test_update_block_replaces_content(client, auth_headers, test_page):
    """Le serveur remplace le contenu en entier, la fusion est côté éditeur"""
    block_id = create_block(client, auth_headers, test_page["id"], type="code",
                            content={"code": "x", "language": "javascript", "output": "y"}).json()["id"]

    response = client.put(f"/blocks/{block_id}", headers=auth_headers, json={"content": {"code": "z"}})
    assert response.status_code == 200
    assert response.json()["content"] == {"code": "z"}

def test_update_block_order_only(client, auth_headers, test_page):
    block_id = create_block(client, auth_headers, test_page["id"]).json()["id"]
    response = client.put(f"/blocks/{block_id}", headers=auth_headers, json={"order_index": 5})
    assert response.status_code == 200
    data = response.json()
    assert data["order_index"] == 5
    assert data["content"] == {"text": "Mon premier block"}

def test_update_block_of_other_user(client, auth_headers, other_headers, test_page):
    block_id = create_block(client, auth_headers, test_page["id"]).json()["id"]
    response = client.put(f"/blocks/{block_id}", headers=other_headers, json={"order_index": 1})
    assert response.status_code == 403

# ========== TEST DELETE BLOCK ==========
def test_delete_block_success(client, auth_headers, test_page):
    """Tester la suppression d'un block"""
    block_id = create_block(client, auth_headers, test_page["id"]).json()["id"]

    response = client.delete(f"/blocks/{block_id}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get(f"/blocks/page/{test_page['id']}", headers=auth_headers).json() == []

def test_delete_missing_block(client, auth_headers):
    response = client.delete("/blocks/999", headers=auth_headers)
    assert response.status_code == 403

# ========== TEST REORDER BLOCKS ==========
def test_reorder_blocks(client, auth_headers, test_page):
    """Tester la réorganisation des blocks"""
    first = create_block(client, auth_headers, test_page["id"], order_index=0).json()["id"]
    second = create_block(client, auth_headers, test_page["id"], order_index=1).json()["id"]

    response = client.put(
        f"/blocks/reorder/{test_page['id']}",
        headers=auth_headers,
        json={"block_orders": [{"id": first, "order_index": 1}, {"id": second, "order_index": 0}]}
    )
    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [second, first]

def test_reorder_rejects_foreign_block(client, auth_headers, test_page):
    first = create_block(client, auth_headers, test_page["id"], order_index=0).json()["id"]
    other_page = client.post("/pages", headers=auth_headers, json={"title": "Autre"}).json()
    foreign = create_block(client, auth_headers, other_page["id"]).json()["id"]

    response = client.put(
        f"/blocks/reorder/{test_page['id']}",
        headers=auth_headers,
        json={"block_orders": [{"id": first, "order_index": 3}, {"id": foreign, "order_index": 0}]}
    )
    assert response.status_code == 403
    # rien n'a été modifié
    data = client.get(f"/blocks/page/{test_page['id']}", headers=auth_headers).json()
    assert data[0]["order_index"] == 0
