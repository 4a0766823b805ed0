# tests/test_admission_gate.py

from __future__ import annotations

import asyncio

import pytest

from inflight.tasks.gate import AdmissionGate


def test_gate_rejects_zero_capacity() -> None:
    with pytest.raises(ValueError):
        AdmissionGate(0)


def test_gate_must_be_created_inside_a_running_loop() -> None:
    with pytest.raises(RuntimeError):
        AdmissionGate(1)


def test_gate_refuses_a_foreign_loop() -> None:
    async def _make() -> AdmissionGate:
        return AdmissionGate(1)

    async def _use(gate: AdmissionGate) -> None:
        async with gate.hold():
            pass

    gate = asyncio.run(_make())
    with pytest.raises(RuntimeError, match="outside the event loop"):
        asyncio.run(_use(gate))


@pytest.mark.asyncio
async def test_hold_counts_permits() -> None:
    gate = AdmissionGate(2)
    assert gate.capacity == 2
    assert gate.available == 2

    async with gate.hold():
        assert gate.in_use == 1
        async with gate.hold():
            assert gate.in_use == 2
            assert gate.available == 0
            assert gate.locked()

    assert gate.in_use == 0
    assert not gate.locked()


@pytest.mark.asyncio
async def test_permit_released_when_body_raises() -> None:
    gate = AdmissionGate(1)

    with pytest.raises(KeyError):
        async with gate.hold():
            raise KeyError("boom")

    assert gate.in_use == 0
    async with gate.hold():
        assert gate.in_use == 1


@pytest.mark.asyncio
async def test_permit_released_when_body_is_cancelled() -> None:
    gate = AdmissionGate(1)
    entered = asyncio.Event()

    async def holder() -> None:
        async with gate.hold():
            entered.set()
            await asyncio.sleep(10)

    task = asyncio.create_task(holder())
    await entered.wait()
    assert gate.in_use == 1

    task.cancel()
    await asyncio.wait({task})

    assert task.cancelled()
    assert gate.in_use == 0


@pytest.mark.asyncio
async def test_waiters_are_admitted_in_arrival_order() -> None:
    gate = AdmissionGate(1)
    order: list[int] = []

    async def worker(i: int) -> None:
        async with gate.hold():
            order.append(i)
            await asyncio.sleep(0.001)

    tasks = [asyncio.create_task(worker(i)) for i in range(5)]
    await asyncio.wait(tasks)

    assert order == [0, 1, 2, 3, 4]
