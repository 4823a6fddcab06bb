import pytest

from srops.hashing import hash_object, spew_format
from srops.model import MountInfo


def test_map_keys_sorted():
    assert spew_format({"b": "1", "a": "2"}) == spew_format({"a": "2", "b": "1"})


def test_different_objects_hash_differently():
    assert hash_object(MountInfo(name="a")) != hash_object(MountInfo(name="b"))
    assert hash_object(MountInfo(name="a")) == hash_object(MountInfo(name="a"))