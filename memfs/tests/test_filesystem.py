"""Tests for MemFS tree operations and the change events they emit."""

import unittest

from memfs.exceptions import (
    EntryExistsError,
    EntryIsADirectoryError,
    EntryNotADirectoryError,
    EntryNotFoundError,
    FileSystemException,
    NoPermissionsError,
)
from memfs.filesystem.entry import FileType
from memfs.filesystem.notifier import FileChangeEvent, FileChangeType
from memfs.core.subsystem import SubsystemState
from memfs.tests.helpers import make_fs, settle

CREATED = FileChangeType.CREATED
CHANGED = FileChangeType.CHANGED
DELETED = FileChangeType.DELETED


class TestReadWrite(unittest.TestCase):
    """write, read and stat."""

    def setUp(self):
        self.fs, self.loop, self.clock, self.batches = make_fs()

    def test_write_then_read(self):
        self.fs.write('/a.txt', b'content', create=True)

        self.assertEqual(self.fs.read('/a.txt'), b'content')
        stat = self.fs.stat('/a.txt')
        self.assertEqual(stat.type, FileType.FILE)
        self.assertEqual(stat.size, 7)

    def test_overwrite_replaces_content(self):
        self.fs.write('/a.txt', b'first version', create=True)
        self.fs.write('/a.txt', b'2nd', create=False)

        self.assertEqual(self.fs.read('/a.txt'), b'2nd')
        self.assertEqual(self.fs.stat('/a.txt').size, 3)

    def test_write_updates_mtime(self):
        self.fs.write('/a.txt', b'x', create=True)
        entry = self.fs._root.entries['a.txt']
        entry.mtime = 0.0

        self.fs.write('/a.txt', b'y', create=False)

        self.assertGreater(self.fs.stat('/a.txt').mtime, 0.0)

    def test_empty_file_reads_empty(self):
        self.fs.write('/empty', b'', create=True)
        self.assertEqual(self.fs.read('/empty'), b'')
        self.assertEqual(self.fs.stat('/empty').size, 0)

    def test_write_without_create_on_missing_file(self):
        with self.assertRaises(EntryNotFoundError) as ctx:
            self.fs.write('/missing.txt', b'x', create=False)
        self.assertEqual(ctx.exception.path, '/missing.txt')
        self.assertFalse(self.fs.exists('/missing.txt'))

    def test_exclusive_create_on_existing_file(self):
        self.fs.write('/a.txt', b'original', create=True)

        with self.assertRaises(EntryExistsError):
            self.fs.write('/a.txt', b'other', create=True, exclusive=True)
        self.assertEqual(self.fs.read('/a.txt'), b'original')

    def test_exclusive_without_create_updates_existing(self):
        self.fs.write('/a.txt', b'original', create=True)
        self.fs.write('/a.txt', b'new', create=False, exclusive=True)
        self.assertEqual(self.fs.read('/a.txt'), b'new')

    def test_write_into_missing_parent(self):
        with self.assertRaises(EntryNotFoundError) as ctx:
            self.fs.write('/nope/a.txt', b'x', create=True)
        self.assertEqual(ctx.exception.path, '/nope')

    def test_write_below_a_file(self):
        self.fs.write('/a.txt', b'x', create=True)
        with self.assertRaises(EntryNotADirectoryError):
            self.fs.write('/a.txt/b.txt', b'y', create=True)

    def test_write_onto_directory(self):
        self.fs.mkdir('/docs')
        with self.assertRaises(EntryIsADirectoryError):
            self.fs.write('/docs', b'x', create=True)
        self.assertTrue(self.fs.is_directory('/docs'))

    def test_write_to_root_is_refused(self):
        with self.assertRaises(NoPermissionsError):
            self.fs.write('/', b'x', create=True)

    def test_read_missing(self):
        with self.assertRaises(EntryNotFoundError):
            self.fs.read('/missing')

    def test_read_directory_is_empty(self):
        self.fs.mkdir('/docs')
        self.assertEqual(self.fs.read('/docs'), b'')

    def test_content_is_copied_on_write(self):
        buffer = bytearray(b'abc')
        self.fs.write('/a', buffer, create=True)
        buffer[0] = ord('z')
        self.assertEqual(self.fs.read('/a'), b'abc')

    def test_stat_missing(self):
        with self.assertRaises(EntryNotFoundError):
            self.fs.stat('/missing')

    def test_non_bytes_content_is_rejected(self):
        with self.assertRaises(TypeError):
            self.fs.write('/a', 3, create=True)
        with self.assertRaises(TypeError):
            self.fs.write('/b', 'text', create=True)
        self.assertFalse(self.fs.exists('/a'))

    def test_memoryview_content(self):
        self.fs.write('/a', memoryview(b'abc'), create=True)
        self.assertEqual(self.fs.read('/a'), b'abc')

    def test_stat_root(self):
        self.assertEqual(self.fs.stat('/').type, FileType.DIRECTORY)
        self.assertEqual(self.fs.stat(''), self.fs.stat('/'))

    def test_write_emits_created_then_changed(self):
        self.fs.write('/a.txt', b'x', create=True)
        self.fs.write('/a.txt', b'y', create=False)
        settle(self.loop, self.clock)

        self.assertEqual(self.batches, [[
            FileChangeEvent(CREATED, '/a.txt'),
            FileChangeEvent(CHANGED, '/a.txt'),
            FileChangeEvent(CHANGED, '/a.txt'),
        ]])

    def test_failed_write_emits_nothing(self):
        with self.assertRaises(EntryNotFoundError):
            self.fs.write('/a.txt', b'x', create=False)
        settle(self.loop, self.clock)
        self.assertEqual(self.batches, [])


class TestReaddir(unittest.TestCase):
    """Listing directories."""

    def setUp(self):
        self.fs, self.loop, self.clock, self.batches = make_fs()

    def test_lists_exactly_the_written_names(self):
        self.fs.mkdir('/d')
        names = ['one.txt', 'two.txt', 'three.bin']
        for name in names:
            self.fs.write(f'/d/{name}', name.encode(), create=True)
        self.fs.mkdir('/d/sub')
        self.fs.write('/d/sub/deep.txt', b'deep', create=True)

        listing = dict(self.fs.readdir('/d'))

        self.assertEqual(set(listing), set(names) | {'sub'})
        for name, stat in listing.items():
            self.assertEqual(stat, self.fs.stat('/d/' + name))

    def test_empty_root(self):
        self.assertEqual(self.fs.readdir('/'), [])

    def test_readdir_on_file(self):
        self.fs.write('/a.txt', b'x', create=True)
        with self.assertRaises(EntryNotADirectoryError) as ctx:
            self.fs.readdir('/a.txt')
        self.assertEqual(ctx.exception.kind, 'EntryNotADirectory')

    def test_readdir_missing(self):
        with self.assertRaises(EntryNotFoundError):
            self.fs.readdir('/missing')

    def test_host_aliases(self):
        self.fs.create_directory('/d')
        self.fs.write_file('/d/f', b'data', create=True)
        self.assertEqual(self.fs.read_file('/d/f'), b'data')
        self.assertEqual([name for name, _ in self.fs.read_directory('/d')], ['f'])


class TestMkdir(unittest.TestCase):
    """Creating directories."""

    def setUp(self):
        self.fs, self.loop, self.clock, self.batches = make_fs()

    def test_mkdir_updates_parent(self):
        stat = self.fs.mkdir('/docs')

        self.assertEqual(stat.type, FileType.DIRECTORY)
        self.assertEqual(stat.size, 0)
        self.assertEqual(self.fs.stat('/').size, 1)

    def test_mkdir_events(self):
        self.fs.mkdir('/docs')
        self.fs.mkdir('/docs/api')
        settle(self.loop, self.clock)

        self.assertEqual(self.batches, [[
            FileChangeEvent(CHANGED, '/'),
            FileChangeEvent(CREATED, '/docs'),
            FileChangeEvent(CHANGED, '/docs'),
            FileChangeEvent(CREATED, '/docs/api'),
        ]])

    def test_mkdir_missing_parent(self):
        with self.assertRaises(EntryNotFoundError):
            self.fs.mkdir('/a/b')

    def test_mkdir_under_file(self):
        self.fs.write('/a', b'', create=True)
        with self.assertRaises(EntryNotADirectoryError):
            self.fs.mkdir('/a/b')

    def test_mkdir_replaces_existing_entry(self):
        self.fs.mkdir('/docs')
        self.fs.write('/docs/readme.txt', b'hello', create=True)

        self.fs.mkdir('/docs')

        self.assertEqual(self.fs.readdir('/docs'), [])
        self.assertEqual(self.fs.stat('/').size, 2)

    def test_mkdir_root_is_refused(self):
        with self.assertRaises(NoPermissionsError):
            self.fs.mkdir('/')


class TestDelete(unittest.TestCase):
    """Removing entries."""

    def setUp(self):
        self.fs, self.loop, self.clock, self.batches = make_fs()

    def test_delete_file(self):
        self.fs.mkdir('/docs')
        self.fs.write('/docs/a.txt', b'x', create=True)
        self.fs.delete('/docs/a.txt')

        with self.assertRaises(EntryNotFoundError):
            self.fs.stat('/docs/a.txt')
        self.assertEqual(self.fs.readdir('/docs'), [])

    def test_delete_adjusts_parent_metadata(self):
        self.fs.mkdir('/docs')
        self.fs.mkdir('/docs/a')
        self.fs._root.entries['docs'].mtime = 0.0

        self.fs.delete('/docs/a')

        stat = self.fs.stat('/docs')
        self.assertEqual(stat.size, 0)
        self.assertGreater(stat.mtime, 0.0)

    def test_delete_directory_drops_subtree(self):
        self.fs.mkdir('/docs')
        self.fs.mkdir('/docs/nested')
        self.fs.write('/docs/nested/a.txt', b'x', create=True)

        self.fs.delete('/docs')

        self.assertFalse(self.fs.exists('/docs/nested/a.txt'))
        self.assertEqual(self.fs.get_stats()['files'], 0)

    def test_delete_events(self):
        self.fs.mkdir('/docs')
        self.fs.write('/docs/a.txt', b'x', create=True)
        settle(self.loop, self.clock)
        self.batches.clear()

        self.fs.delete('/docs/a.txt')
        settle(self.loop, self.clock)

        self.assertEqual(self.batches, [[
            FileChangeEvent(CHANGED, '/docs'),
            FileChangeEvent(DELETED, '/docs/a.txt'),
        ]])

    def test_delete_missing(self):
        with self.assertRaises(EntryNotFoundError) as ctx:
            self.fs.delete('/missing')
        self.assertEqual(ctx.exception.path, '/missing')

    def test_deleting_a_written_file_underflows_parent_size(self):
        # write never counts new files in the parent size; delete still decrements
        self.fs.mkdir('/docs')
        self.fs.write('/docs/a.txt', b'x', create=True)
        self.assertEqual(self.fs.stat('/docs').size, 0)

        self.fs.delete('/docs/a.txt')

        self.assertEqual(self.fs.stat('/docs').size, -1)

    def test_delete_root_is_refused(self):
        with self.assertRaises(NoPermissionsError) as ctx:
            self.fs.delete('')
        self.assertEqual(ctx.exception.operation, 'delete')


class TestRename(unittest.TestCase):
    """Moving entries."""

    def setUp(self):
        self.fs, self.loop, self.clock, self.batches = make_fs()

    def test_rename_moves_content(self):
        self.fs.write('/a', b'payload', create=True)
        stat = self.fs.rename('/a', '/b')

        with self.assertRaises(EntryNotFoundError):
            self.fs.stat('/a')
        self.assertEqual(self.fs.read('/b'), b'payload')
        self.assertEqual(stat.size, 7)
        self.assertEqual(self.fs._root.entries['b'].name, 'b')

    def test_rename_across_directories(self):
        self.fs.mkdir('/src')
        self.fs.mkdir('/dst')
        self.fs.mkdir('/src/pkg')
        self.fs.write('/src/pkg/mod.py', b'code', create=True)

        self.fs.rename('/src/pkg', '/dst/lib')

        self.assertEqual(self.fs.readdir('/src'), [])
        self.assertEqual(self.fs.read('/dst/lib/mod.py'), b'code')

    def test_rename_replaces_existing_destination(self):
        self.fs.write('/a', b'from a', create=True)
        self.fs.write('/b', b'from b', create=True)

        self.fs.rename('/a', '/b')

        self.assertEqual(self.fs.read('/b'), b'from a')
        self.assertEqual([name for name, _ in self.fs.readdir('/')], ['b'])

    def test_rename_events(self):
        self.fs.write('/a', b'x', create=True)
        settle(self.loop, self.clock)
        self.batches.clear()

        self.fs.rename('/a', '/b')
        settle(self.loop, self.clock)

        self.assertEqual(self.batches, [[
            FileChangeEvent(DELETED, '/a'),
            FileChangeEvent(CREATED, '/b'),
        ]])

    def test_rename_missing_source(self):
        with self.assertRaises(EntryNotFoundError):
            self.fs.rename('/missing', '/b')

    def test_rename_into_missing_parent_leaves_source(self):
        self.fs.write('/a', b'x', create=True)

        with self.assertRaises(EntryNotFoundError):
            self.fs.rename('/a', '/nope/b')
        self.assertEqual(self.fs.read('/a'), b'x')

    def test_rename_root_is_refused(self):
        self.fs.mkdir('/d')
        with self.assertRaises(NoPermissionsError):
            self.fs.rename('/', '/d/root')
        with self.assertRaises(NoPermissionsError):
            self.fs.rename('/d', '/')


class TestScenario(unittest.TestCase):
    """End-to-end usage."""

    def test_docs_walkthrough(self):
        fs, loop, clock, batches = make_fs()

        fs.mkdir('/docs')
        fs.write('/docs/readme.txt', b'hello', create=True)

        listing = fs.readdir('/docs')
        self.assertEqual(len(listing), 1)
        name, stat = listing[0]
        self.assertEqual(name, 'readme.txt')
        self.assertEqual(stat.type, FileType.FILE)
        self.assertEqual(stat.size, 5)

        fs.rename('/docs/readme.txt', '/docs/README.md')
        self.assertEqual(fs.read('/docs/README.md'), b'hello')

        fs.delete('/docs/README.md')
        self.assertEqual(fs.readdir('/docs'), [])

        settle(loop, clock)
        self.assertEqual(len(batches), 1)
        self.assertEqual([e.type for e in batches[0]], [
            CHANGED, CREATED,
            CREATED, CHANGED,
            DELETED, CREATED,
            CHANGED, DELETED,
        ])

    def test_errors_share_a_base_class(self):
        fs, _, _, _ = make_fs()
        with self.assertRaises(FileSystemException):
            fs.read('/missing')

    def test_watch_returns_noop_handle(self):
        fs, loop, clock, batches = make_fs()
        handle = fs.watch('/docs', recursive=True)
        handle.dispose()
        handle.dispose()

        fs.write('/elsewhere', b'x', create=True)
        settle(loop, clock)
        self.assertEqual(len(batches), 1)

    def test_get_stats(self):
        fs, _, _, _ = make_fs()
        fs.mkdir('/d')
        fs.write('/d/a', b'1234', create=True)
        fs.write('/b', b'56', create=True)

        stats = fs.get_stats()

        self.assertEqual(stats['files'], 2)
        self.assertEqual(stats['directories'], 2)
        self.assertEqual(stats['total_size'], 6)
        self.assertEqual(stats['notifier']['state'], 'PENDING')


class TestErrorPaths(unittest.TestCase):
    """Errors report the offending path in normalized form."""

    def setUp(self):
        self.fs, _, _, _ = make_fs()

    def _error_path(self, operation, *args, **kwargs):
        with self.assertRaises(FileSystemException) as ctx:
            operation(*args, **kwargs)
        return ctx.exception.path

    def test_missing_entry_reports_same_path_everywhere(self):
        paths = [
            self._error_path(self.fs.stat, '//x/'),
            self._error_path(self.fs.read, '//x/'),
            self._error_path(self.fs.write, '//x/', b'', create=False),
            self._error_path(self.fs.delete, '//x/'),
        ]
        self.assertEqual(paths, ['/x'] * 4)

    def test_not_a_directory_reports_normalized_path(self):
        self.fs.write('/f', b'', create=True)
        self.assertEqual(self._error_path(self.fs.readdir, '//f/'), '/f')
        self.assertEqual(self._error_path(self.fs.mkdir, 'f//sub'), '/f')


class TestLifecycle(unittest.TestCase):
    """Subsystem lifecycle."""

    def test_lifecycle_with_external_loop(self):
        fs, loop, _, _ = make_fs()
        self.assertFalse(fs.health_check())

        fs.initialize()
        self.assertEqual(fs.state, SubsystemState.INITIALIZED)
        fs.start()
        self.assertTrue(fs.health_check())
        self.assertFalse(loop.running)

        fs.stop()
        fs.cleanup()
        self.assertEqual(fs.state, SubsystemState.STOPPED)

    def test_cleanup_discards_pending_batch(self):
        fs, loop, clock, batches = make_fs()
        fs.write('/a', b'x', create=True)

        fs.cleanup()
        settle(loop, clock)

        self.assertEqual(batches, [])

    def test_owned_loop_runs_in_background(self):
        from memfs.core.config_loader import Config
        from memfs.filesystem.memfs import MemFS
        import threading

        fs = MemFS(config=Config())
        delivered = threading.Event()
        fs.on_did_change_file(lambda batch: delivered.set())
        fs.initialize()
        fs.start()
        try:
            self.assertTrue(fs.event_loop.running)
            fs.write('/a', b'x', create=True)
            self.assertTrue(delivered.wait(timeout=2.0))
        finally:
            fs.stop()
        self.assertFalse(fs.event_loop.running)


if __name__ == '__main__':
    unittest.main()
