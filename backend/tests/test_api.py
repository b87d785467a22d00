"""HTTP surface of the workspace, exercised through ASGITransport."""

from httpx import AsyncClient

from devspace.templates.init_project import BASELINE_FILES


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_list_files(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/workspace/files")

    assert resp.status_code == 200
    files = resp.json()
    assert [f["name"] for f in files] == list(BASELINE_FILES)
    assert [f["file_type"] for f in files] == ["text/html", "text/css", "application/javascript"]


async def test_file_crud(client: AsyncClient) -> None:
    """Exercise create -> update -> rename -> delete in one test."""
    resp = await client.post("/api/v1/workspace/files", json={"name": "a.js"})
    assert resp.status_code == 201
    assert resp.json() == {"name": "a.js", "content": "", "file_type": "application/javascript"}

    resp = await client.put("/api/v1/workspace/files/a.js", json={"content": "go()"})
    assert resp.status_code == 200
    assert resp.json()["content"] == "go()"

    resp = await client.post("/api/v1/workspace/files/a.js/rename", json={"new_name": "b.js"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "b.js"
    assert resp.json()["content"] == "go()"

    resp = await client.get("/api/v1/workspace/files/a.js")
    assert resp.status_code == 404

    resp = await client.delete("/api/v1/workspace/files/b.js")
    assert resp.status_code == 204
    resp = await client.delete("/api/v1/workspace/files/b.js")
    assert resp.status_code == 204

    resp = await client.get("/api/v1/workspace/files/b.js")
    assert resp.status_code == 404


async def test_create_duplicate(client: AsyncClient) -> None:
    resp1 = await client.post("/api/v1/workspace/files", json={"name": "a.js"})
    assert resp1.status_code == 201
    resp2 = await client.post("/api/v1/workspace/files", json={"name": "a.js"})
    assert resp2.status_code == 409

    names = [f["name"] for f in (await client.get("/api/v1/workspace/files")).json()]
    assert names.count("a.js") == 1


async def test_create_blank_name(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/workspace/files", json={"name": "   "})
    assert resp.status_code == 422


async def test_rename_errors(client: AsyncClient) -> None:
    resp = await client.post("/api/v1/workspace/files/missing.js/rename", json={"new_name": "x.js"})
    assert resp.status_code == 404

    resp = await client.post("/api/v1/workspace/files/app.js/rename", json={"new_name": "style.css"})
    assert resp.status_code == 409

    resp = await client.post("/api/v1/workspace/files/app.js/rename", json={"new_name": ""})
    assert resp.status_code == 422


async def test_workspace_state_and_tabs(client: AsyncClient) -> None:
    resp = await client.get("/api/v1/workspace")
    assert resp.json() == {
        "files": list(BASELINE_FILES),
        "open_files": ["index.html"],
        "active": "index.html",
        "active_exists": True,
        "revision": 0,
    }

    resp = await client.post("/api/v1/workspace/tabs/app.js/open")
    assert resp.json()["open_files"] == ["app.js", "index.html"]
    assert resp.json()["active"] == "app.js"

    resp = await client.post("/api/v1/workspace/tabs/index.html/activate")
    assert resp.json()["active"] == "index.html"

    resp = await client.post("/api/v1/workspace/tabs/index.html/close")
    assert resp.json()["open_files"] == ["app.js"]
    assert resp.json()["active"] == "app.js"

    resp = await client.post("/api/v1/workspace/tabs/ghost.js/open")
    assert resp.status_code == 404


async def test_run_and_preview_document(client: AsyncClient) -> None:
    await client.put("/api/v1/workspace/files/style.css", json={"content": "body{color:red}"})
    await client.put("/api/v1/workspace/files/app.js", json={"content": "console.log(1)"})

    resp = await client.post("/api/v1/workspace/run")
    assert resp.status_code == 200
    body = resp.json()
    assert body["revision"] == 1
    assert body["sandbox"] == "allow-scripts"
    assert body["document_url"] == "/api/v1/workspace/preview/document?rev=1"
    assert body["report"]["warnings"] == []

    resp = await client.get("/api/v1/workspace/preview/document")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.headers["x-preview-revision"] == "1"
    assert "sandbox allow-scripts" in resp.headers["content-security-policy"]
    assert "<style>body{color:red}</style>" in resp.text
    assert "<script>\nconsole.log(1)\n</script>" in resp.text

    resp = await client.post("/api/v1/workspace/run")
    assert resp.json()["revision"] == 2


async def test_preview_after_script_deleted(client: AsyncClient) -> None:
    await client.delete("/api/v1/workspace/files/app.js")

    resp = await client.get("/api/v1/workspace/preview")
    report = resp.json()["report"]
    assert report["missing_files"] == ["app.js"]

    resp = await client.get("/api/v1/workspace/preview/document")
    assert "<script>\n\n</script>" in resp.text


async def test_reset(client: AsyncClient) -> None:
    await client.post("/api/v1/workspace/files/index.html/rename", json={"new_name": "main.html"})

    resp = await client.post("/api/v1/workspace/reset")

    assert resp.status_code == 200
    state = resp.json()
    assert state["files"] == list(BASELINE_FILES)
    assert state["open_files"] == ["index.html"]
    assert state["revision"] == 1
