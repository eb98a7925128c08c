import asyncio

import pytest

from eventqueue import iterator
from eventqueue import queue


def fill(q):
    q.send(0)
    q.send(1)
    q.raise_signal(RuntimeError("An error was triggered"))
    q.send(2)
    q.shutdown()


@pytest.mark.asyncio
async def test_async_for():
    q = queue.EventQueue()

    async def produce():
        await asyncio.sleep(0.01)
        for i in range(4):
            q.send(i)
        q.shutdown()

    producer = asyncio.create_task(produce())
    assert [item async for item in q] == [0, 1, 2, 3]
    await producer


@pytest.mark.asyncio
async def test_async_for_on_iterator():
    q = queue.EventQueue()
    for i in range(4):
        q.send(i)
    q.shutdown()
    it = q.__aiter__()
    assert it.__aiter__() is it
    assert [item async for item in it] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_next():
    q = queue.EventQueue()
    q.send("a")
    q.shutdown()
    it = iterator.Iterator(q)
    assert await it.next() == iterator.Result("a", False)
    result = await it.next()
    assert result.done
    assert result.value is q.end


@pytest.mark.asyncio
async def test_signal():
    q = queue.EventQueue()
    error = RuntimeError("An error was triggered")

    async def produce():
        await asyncio.sleep(0.01)
        q.send(0)
        q.send(1)
        await asyncio.sleep(0.005)
        q.raise_signal(error)
        q.send(2)
        q.shutdown()

    producer = asyncio.create_task(produce())
    received = []
    with pytest.raises(RuntimeError) as excinfo:
        async for item in q:
            received.append(item)
    assert excinfo.value is error
    assert received == [0, 1]
    await producer
    # Items behind the signal are still there.
    assert await q.receive() == 2
    assert await q.receive() is q.end


@pytest.mark.asyncio
async def test_stays_exhausted():
    q = queue.EventQueue()
    q.send(0)
    q.shutdown()
    it = q.__aiter__()
    assert await it.__anext__() == 0
    with pytest.raises(StopAsyncIteration):
        await it.__anext__()
    with pytest.raises(StopAsyncIteration):
        await it.__anext__()
    assert [item async for item in q] == []


@pytest.mark.asyncio
async def test_fresh_iterator_continues():
    q = queue.EventQueue()
    fill(q)
    with pytest.raises(RuntimeError):
        async for _ in q:
            pass
    assert [item async for item in q] == [2]


@pytest.mark.asyncio
async def test_equivalent_to_receive_loop():
    q = queue.EventQueue()
    fill(q)
    iterated = []
    with pytest.raises(RuntimeError) as iterated_error:
        async for item in q:
            iterated.append(item)

    q = queue.EventQueue()
    fill(q)
    received = []
    with pytest.raises(RuntimeError) as received_error:
        while (item := await q.receive()) is not q.end:
            if q.is_signal(item):
                raise item.error
            received.append(item)

    assert iterated == received == [0, 1]
    assert str(iterated_error.value) == str(received_error.value)
