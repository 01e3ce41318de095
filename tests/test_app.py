import httpx
import pytest


@pytest.mark.asyncio
async def test_index(db_engine):
    from main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == "Hello World!"
