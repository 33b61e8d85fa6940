import pytest

from klibkit.vector import Vector


def is_pow2(x):
    return x > 0 and x & (x - 1) == 0


def test_push_and_iterate():
    v = Vector()
    for value in range(10):
        v.push(value)
    assert list(v) == list(range(10))
    assert len(v) == 10


def test_push_capacity_starts_at_two_and_doubles():
    v = Vector()
    v.push(10)
    assert v.capacity() == 2
    for value in range(100):
        v.push(value)
        assert v.capacity() >= len(v)
        assert is_pow2(v.capacity())


def test_pop_is_lifo():
    v = Vector([1, 2, 3])
    assert v.pop() == 3
    assert v.pop() == 2
    assert list(v) == [1]


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        Vector().pop()


def test_dynamic_assignment_grows():
    v = Vector()
    v.push(10)
    v[20] = 5
    assert v[20] == 5
    assert len(v) == 21
    assert v[0] == 10
    assert all(x is None for x in list(v)[1:20])
    assert is_pow2(v.capacity()) and v.capacity() >= 21
    v[20] = 4
    assert v[20] == 4


def test_at_uses_fill_value():
    v = Vector(fill=0)
    assert v.at(7) == 0
    assert list(v) == [0] * 8


def test_at_within_capacity_keeps_capacity():
    v = Vector()
    v.resize(10)
    v.at(5)
    assert v.capacity() == 10
    assert len(v) == 6


def test_at_negative_raises():
    with pytest.raises(IndexError):
        Vector([1]).at(-1)


def test_getitem_out_of_range_raises():
    v = Vector([1, 2])
    with pytest.raises(IndexError):
        v.__getitem__(2)
    assert list(v) == [1, 2]
    assert len(v) == 2


def test_resize_shrinks_contents():
    v = Vector(range(10))
    v.resize(4)
    assert list(v) == [0, 1, 2, 3]
    assert v.capacity() == 4


def test_resize_negative_raises():
    with pytest.raises(ValueError):
        Vector().resize(-1)


def test_copy_from():
    source = Vector(["a", "b", "c"])
    target = Vector()
    target.copy_from(source)
    assert list(target) == ["a", "b", "c"]
    assert target.capacity() >= len(source)
    source[0] = "z"
    assert target[0] == "a"