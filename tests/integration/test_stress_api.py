"""Integration tests for the weekly stress endpoints and the measurement stream."""

import json
import random

import pytest
import pytest_check as check
from httpx import AsyncClient

from serenity.api.deps import Services
from serenity.services.measurement import MeasurementService, measurement_frames
from tests.fakes import FakeStore


def data_messages(body: str) -> list[dict]:
    return [json.loads(line[6:]) for line in body.splitlines() if line.startswith("data: ")]


class TestStressWeek:
    """Integration tests for GET /stress and PUT /stress/{day}."""

    async def test_new_user_week_is_neutral(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/stress")

        assert response.status_code == 200
        summary = response.json()
        check.equal([d["level"] for d in summary["days"]], [50] * 7)
        check.equal({d["band"] for d in summary["days"]}, {"neutral"})
        check.equal(summary["average"], 50)
        check.is_none(summary["trend"])

    async def test_trend_for_selected_day(
        self, async_client: AsyncClient, store: FakeStore
    ) -> None:
        store.collections["users"] = {"user-1": {"stressLevels": [50, 50, 50, 50, 50, 50, 35]}}

        response = await async_client.get("/stress", params={"day": 6})

        check.equal(response.json()["trend"], "Este Dom: -15%")
        check.is_false(response.json()["rising"])

    async def test_invalid_day_query(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/stress", params={"day": 7})

        assert response.status_code == 400

    async def test_record_level(self, async_client: AsyncClient, store: FakeStore) -> None:
        response = await async_client.put("/stress/2", json={"level": 80})

        assert response.status_code == 200
        summary = response.json()
        check.equal(summary["days"][2]["level"], 80)
        check.equal(summary["days"][2]["band"], "high")
        check.equal(summary["trend"], "Este Mié: +30%")
        check.equal(store.collections["users"]["user-1"]["stressLevels"][2], 80)

    @pytest.mark.parametrize("level", [-1, 101])
    async def test_level_out_of_range(self, async_client: AsyncClient, level: int) -> None:
        response = await async_client.put("/stress/0", json={"level": level})

        assert response.status_code == 422

    async def test_record_invalid_day(self, async_client: AsyncClient) -> None:
        response = await async_client.put("/stress/8", json={"level": 10})

        assert response.status_code == 400


class TestMeasurementStream:
    """Integration tests for POST /stress/{day}/measure."""

    @pytest.fixture(autouse=True)
    def fast_measurement(self, services: Services) -> None:
        """Run the measurement loop on a fake clock."""
        clock = {"now": 0.0}

        async def sleep(seconds: float) -> None:
            clock["now"] += seconds

        services.measurement = MeasurementService(
            services.stress,
            frames=lambda: measurement_frames(
                duration=1.5,
                interval=0.5,
                num_points=20,
                rng=random.Random(5),
                sleep=sleep,
                clock=lambda: clock["now"],
            ),
        )

    async def test_streams_frames_then_stores_level(
        self, async_client: AsyncClient, store: FakeStore
    ) -> None:
        response = await async_client.post("/stress/4/measure")

        assert response.status_code == 200
        assert "text/event-stream" in response.headers["content-type"]
        messages = data_messages(response.text)
        waveform, final = messages[:-1], messages[-1]
        check.equal(len(waveform), 3)
        check.is_true(all(len(m["points"]) == 20 for m in waveform))
        check.is_true(final["done"])
        check.equal(store.collections["users"]["user-1"]["stressLevels"][4], final["level"])

    async def test_invalid_day_rejected_before_streaming(
        self, async_client: AsyncClient
    ) -> None:
        response = await async_client.post("/stress/7/measure")

        check.equal(response.status_code, 400)
        check.is_in("application/json", response.headers["content-type"])

    async def test_store_failure_ends_with_error_frame(
        self, async_client: AsyncClient, store: FakeStore
    ) -> None:
        async def broken_set(*args, **kwargs) -> None:
            raise RuntimeError("write failed")

        store.set = broken_set

        response = await async_client.post("/stress/1/measure")

        final = data_messages(response.text)[-1]
        check.is_true(final["done"])
        check.equal(final["error"], "Error al guardar la medición")
        check.is_none(final["level"])
