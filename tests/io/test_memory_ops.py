# tests/io/test_memory_ops.py

import errno

import pytest

from pathvalue.io import MemoryFileSystem, Path, create_fs, get_fs, use_fs, DiskFileSystem
from pathvalue.exceptions import NotAFilePathError, PathNotFoundError, ProtocolError, WrongTypeError


class TestBackendSelection:
    def test_default_is_disk(self):
        assert isinstance(get_fs(), DiskFileSystem)

    def test_use_fs_is_scoped(self, memory_fs):
        with use_fs(memory_fs):
            assert get_fs() is memory_fs
        assert isinstance(get_fs(), DiskFileSystem)

    def test_create_fs(self):
        assert isinstance(create_fs("memory"), MemoryFileSystem)
        assert isinstance(create_fs(), DiskFileSystem)
        with pytest.raises(ProtocolError, match="No filesystem backend"):
            create_fs("s3")


class TestMemoryOperations:
    """The same Path operations, routed to the in-memory backend."""

    @pytest.mark.asyncio
    async def test_write_read_and_exists(self, memory_fs):
        with use_fs(memory_fs):
            target = Path("/project/nested/file.json")
            assert await target.exists() is False
            await target.write_structured({"a": 1})
            assert await Path("/project/nested").exists_as_dir() is True
            assert await target.exists_as_file() is True
            assert await target.read_structured() == {"a": 1}
            with pytest.raises(WrongTypeError):
                await target.exists_as_dir()

    @pytest.mark.asyncio
    async def test_mkdir_without_parents(self, memory_fs):
        with use_fs(memory_fs):
            with pytest.raises(FileNotFoundError):
                await Path("/a/b").mkdir(recursive=False)
            await Path("/a/b").mkdir()
            assert await Path("/a").list_dir() == ["b"]

    @pytest.mark.asyncio
    async def test_remove(self, memory_fs):
        with use_fs(memory_fs):
            tree = Path("/tree")
            await tree.join("leaf.txt").write("x")
            with pytest.raises(OSError):
                await tree.remove()
            await tree.remove(recursive=True)
            assert await tree.exists() is False
            with pytest.raises(PathNotFoundError):
                await tree.remove()
            await tree.remove_force()

    @pytest.mark.asyncio
    async def test_copy_and_rename(self, memory_fs):
        with use_fs(memory_fs):
            source = await Path("/src.txt").write("payload")
            copied = await source.copy("/copies/dst.txt")
            assert await copied.read_text() == "payload"
            moved = await copied.rename(Path("/moved.txt"))
            assert await copied.exists() is False
            assert await moved.read_text() == "payload"

    @pytest.mark.asyncio
    async def test_temp_dir_and_trash(self, memory_fs):
        with use_fs(memory_fs):
            temp_dir = await Path.make_temp_dir()
            assert str(temp_dir).startswith("/tmp/pathvalue-")
            assert await temp_dir.exists_as_dir() is True
            await temp_dir.join("keep.txt").write("x")
            await temp_dir.trash()
            assert await temp_dir.exists() is False
            trashed = await Path("/.Trash").list_dir()
            assert len(trashed) == 1
            assert trashed[0].startswith(temp_dir.basename.path)

    @pytest.mark.asyncio
    async def test_does_not_touch_disk(self, memory_fs, tmp_path):
        target = Path(str(tmp_path)).join("only-in-memory.txt")
        with use_fs(memory_fs):
            await target.write("x")
            assert await target.exists() is True
        assert await target.exists() is False


class TestMemoryMatchesDisk:
    """Directory references and renames fail the way os calls do on disk."""

    @pytest.mark.asyncio
    async def test_directory_references(self, memory_fs):
        with use_fs(memory_fs):
            text_file = await Path("/f.txt").write("data")
            with pytest.raises(NotADirectoryError):
                await Path("/f.txt/").exists()
            with pytest.raises(NotADirectoryError):
                await Path("/f.txt/child").exists()
            with pytest.raises(NotAFilePathError):
                await Path("/f.txt/").exists_as_file()
            with pytest.raises(NotADirectoryError):
                await Path("/f.txt/").read_text()
            with pytest.raises(NotADirectoryError):
                await Path("/f.txt/").remove()
            assert await text_file.read_text() == "data"
            with pytest.raises(IsADirectoryError):
                await Path("/out/").write("x")
            assert await Path("/out").exists() is False

    @pytest.mark.asyncio
    async def test_rename_onto_existing(self, memory_fs):
        with use_fs(memory_fs):
            source = await Path("/a.txt").write("x")
            target = await Path("/d").mkdir()
            with pytest.raises(IsADirectoryError):
                await source.rename(target)
            assert await target.list_dir() == []

            tree = Path("/tree")
            await tree.join("leaf.txt").write("x")
            await Path("/full/keep.txt").write("x")
            with pytest.raises(OSError) as excinfo:
                await tree.rename("/full")
            assert excinfo.value.errno == errno.ENOTEMPTY

            await tree.rename(target)
            assert await target.list_dir() == ["leaf.txt"]
            assert await tree.exists() is False

    @pytest.mark.asyncio
    async def test_recursive_copy_onto_existing_directory(self, memory_fs):
        with use_fs(memory_fs):
            await Path("/tree/leaf/file.txt").write("x")
            target = await Path("/dest").mkdir()
            await Path("/tree").copy(target, recursive=True)
            assert await target.join("tree/leaf/file.txt").read_text() == "x"
