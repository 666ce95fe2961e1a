"""持久性集成测试

关闭连接（模拟进程退出）后重新打开，事件与活跃状态完整保留。
"""

from pathlib import Path

import pytest
from evtrack.core.store import create_store_group
from httpx import ASGITransport, AsyncClient


class TestDurability:
    async def test_events_survive_restart(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        db_path = str(tmp_path / "durable.db")
        monkeypatch.setenv("EVTRACK_DB_PATH", db_path)

        from evtrack.gateway.main import create_app

        # 第一次启动：创建并完成一个事件，再启动一个
        app1 = create_app()
        sg1 = await create_store_group(db_path)
        app1.state.store_group = sg1
        app1.state.store_timeout_s = 5.0
        async with AsyncClient(
            transport=ASGITransport(app=app1),
            base_url="http://test",
        ) as c1:
            await c1.post("/v1/start", json={"type": "meeting"})
            finished = (await c1.post("/v1/finish", json={"type": "meeting"})).json()
            active = (await c1.post("/v1/start", json={"type": "call"})).json()
        await sg1.close()

        # 第二次启动：数据完整，活跃事件仍可被 start 复用 / finish 完成
        app2 = create_app()
        sg2 = await create_store_group(db_path)
        app2.state.store_group = sg2
        app2.state.store_timeout_s = 5.0
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app2),
                base_url="http://test",
            ) as c2:
                listed = (await c2.get("/v1")).json()
                assert listed == [active, finished]

                again = (await c2.post("/v1/start", json={"type": "call"})).json()
                assert again["id"] == active["id"]

                resp = await c2.post("/v1/finish", json={"type": "call"})
                assert resp.status_code == 200
        finally:
            await sg2.close()
