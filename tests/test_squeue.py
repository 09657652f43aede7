import pytest

from tapclock.squeue import QUEUE_SIZE, ByteQueue


def test_fifo_order():
    q = ByteQueue()
    for b in (0xF8, 0xB0, 0x40):
        q.enqueue(b)
    assert [q.dequeue() for _ in range(3)] == [0xF8, 0xB0, 0x40]


def test_empty_queue_raises():
    q = ByteQueue()
    assert q.is_empty()
    with pytest.raises(IndexError):
        q.dequeue()


def test_capacity_is_one_less_than_size():
    q = ByteQueue()
    accepted = [q.enqueue(i) for i in range(QUEUE_SIZE)]
    assert accepted[:-1] == [True] * (QUEUE_SIZE - 1)
    assert accepted[-1] is False
    assert len(q) == QUEUE_SIZE - 1


def test_overflow_drops_newest():
    q = ByteQueue(size=3)
    q.enqueue(1)
    q.enqueue(2)
    q.enqueue(3)
    assert [q.dequeue(), q.dequeue()] == [1, 2]
    assert q.is_empty()


def test_len_tracks_contents():
    q = ByteQueue()
    q.enqueue(7)
    q.enqueue(8)
    assert len(q) == 2
    q.dequeue()
    assert len(q) == 1
    assert not q.is_empty()


@pytest.mark.parametrize("value", [-1, 256])
def test_rejects_non_byte(value):
    with pytest.raises(ValueError):
        ByteQueue().enqueue(value)


def test_wraps_around_many_times():
    q = ByteQueue(size=4)
    out = []
    for i in range(100):
        q.enqueue(i % 256)
        out.append(q.dequeue())
    assert out == list(range(100))