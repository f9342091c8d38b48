from constants import INODE_SIZE, MAX_FILENAME, POINTERS_PER_INODE
from structures import Inode


def test_new_inode_is_free():
    inode = Inode()
    assert inode.is_free()
    assert inode.size == 0
    assert inode.pointers == [0] * POINTERS_PER_INODE


def test_pack_size():
    assert len(Inode("a.txt").pack()) == INODE_SIZE


def test_unpack_restores_fields():
    inode = Inode("notes.txt")
    inode.size = 3
    inode.pointers[:3] = [7, 2, 9]
    loaded = Inode.unpack(inode.pack())
    assert loaded.name == "notes.txt"
    assert loaded.size == 3
    assert loaded.blocks() == [7, 2, 9]


def test_empty_name_unpacks_as_free():
    assert Inode.unpack(b'\x00' * INODE_SIZE).is_free()
    assert Inode.unpack(b'').is_free()


def test_full_width_name():
    name = "n" * MAX_FILENAME
    assert Inode.unpack(Inode(name).pack()).name == name


def test_matches_trims_whitespace():
    inode = Inode("a.txt")
    assert inode.matches("  a.txt ")
    assert not inode.matches("b.txt")
    assert not Inode().matches("")


def test_copy_is_independent():
    inode = Inode("a")
    inode.size = 1
    inode.pointers[0] = 4
    clone = inode.copy()
    clone.pointers[0] = 5
    assert inode.pointers[0] == 4
