"""Board store and BoardService against SQLite and a temporary upload directory."""

import unittest
from unittest.mock import MagicMock, patch

from board_api.models import Board, BoardStatus
from board_api.services.attachments import AttachmentStorage
from board_api.services.board_store import BoardStore
from board_api.services.boards import BoardService
from board_api.services.exceptions import AttachmentNotFoundError, BoardNotFoundError
from tests.support import add_user, make_session_factory, make_storage, stored_names, upload


class BoardServiceTestCase(unittest.TestCase):
    """Fresh database with users alice and bob, and an empty upload directory."""

    def setUp(self) -> None:
        self.engine, factory = make_session_factory()
        self.db = factory()
        self.tmp, self.storage = make_storage()
        self.service = BoardService(self.db, self.storage)
        self.alice = add_user(self.db, "alice").id
        self.bob = add_user(self.db, "bob").id

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()
        self.tmp.cleanup()

    def _row(self, board_id: int) -> Board | None:
        self.db.expire_all()
        return self.db.get(Board, board_id)


class TestCreateBoard(BoardServiceTestCase):
    def test_without_file_has_no_descriptor(self) -> None:
        board = self.service.create_board("T", "D", self.alice)
        self.assertEqual(board.status, BoardStatus.PUBLIC.value)
        self.assertEqual(board.owner.username, "alice")
        self.assertIsNone(board.file_name)
        self.assertIsNone(board.file_path)
        self.assertIsNone(board.file_size)
        self.assertEqual(stored_names(self.storage), [])
        with self.assertRaises(AttachmentNotFoundError):
            self.service.store.get_attachment_info(board.id)

    def test_with_file_sets_full_descriptor(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("notes.txt", b"0123456789"))
        self.assertEqual(board.file_name, "notes.txt")
        self.assertEqual(board.file_size, 10)
        self.assertNotEqual(board.file_path, "notes.txt")
        info = self.service.store.get_attachment_info(board.id)
        self.assertEqual(info.file_name, "notes.txt")
        self.assertEqual(info.file_path, board.file_path)
        self.assertEqual(self.storage.open_path(info.file_path).read_bytes(), b"0123456789")

    def test_failed_insert_removes_saved_bytes(self) -> None:
        with patch.object(self.service.store, "create", side_effect=RuntimeError("db down")):
            with self.assertRaises(RuntimeError):
                self.service.create_board("T", "D", self.alice, upload=upload("notes.txt", b"abc"))
        self.assertEqual(stored_names(self.storage), [])
        self.assertEqual(self.db.query(Board).count(), 0)


class TestReadBoards(BoardServiceTestCase):
    def test_list_is_owner_scoped_in_creation_order(self) -> None:
        first = self.service.create_board("first", "D", self.alice).id
        self.service.create_board("bob's", "D", self.bob)
        second = self.service.create_board("second", "D", self.alice).id
        boards = self.service.list_boards(self.alice)
        self.assertEqual([b.id for b in boards], [first, second])
        self.assertTrue(all(b.owner.username == "alice" for b in boards))

    def test_get_by_id_not_owner_restricted(self) -> None:
        board_id = self.service.create_board("T", "D", self.alice).id
        board = BoardStore(self.db).get_by_id(board_id)
        self.assertEqual(board.owner.username, "alice")

    def test_get_missing(self) -> None:
        with self.assertRaises(BoardNotFoundError):
            self.service.get_board(9999)


class TestUpdateBoard(BoardServiceTestCase):
    def test_new_file_replaces_descriptor_and_old_bytes(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("old.txt", b"old"))
        old_path = board.file_path

        updated = self.service.update_board(
            board.id, "T2", "D2", self.alice, upload=upload("new.md", b"brand new")
        )

        self.assertEqual(updated.title, "T2")
        self.assertEqual(updated.description, "D2")
        self.assertEqual(updated.file_name, "new.md")
        self.assertEqual(updated.file_size, 9)
        self.assertNotEqual(updated.file_path, old_path)
        with self.assertRaises(AttachmentNotFoundError):
            self.storage.open_path(old_path)
        self.assertEqual(stored_names(self.storage), [updated.file_path])
        self.assertEqual(updated.status, BoardStatus.PUBLIC.value)

    def test_first_file_added_to_board_without_one(self) -> None:
        board = self.service.create_board("T", "D", self.alice)
        updated = self.service.update_board(board.id, "T", "D", self.alice, upload=upload("a.txt", b"a"))
        self.assertEqual(updated.file_name, "a.txt")
        self.assertEqual(stored_names(self.storage), [updated.file_path])

    def test_without_file_keeps_descriptor(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("keep.txt", b"keep"))
        updated = self.service.update_board(board.id, "T2", "D2", self.alice)
        self.assertEqual(updated.file_name, "keep.txt")
        self.assertEqual(updated.file_path, board.file_path)
        self.assertEqual(self.storage.open_path(updated.file_path).read_bytes(), b"keep")

    def test_non_owner_same_error_as_missing_and_no_disk_write(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("a.txt", b"a"))
        before = stored_names(self.storage)

        with self.assertRaises(BoardNotFoundError) as foreign:
            self.service.update_board(board.id, "X", "X", self.bob, upload=upload("b.txt", b"b"))
        with self.assertRaises(BoardNotFoundError) as missing:
            self.service.update_board(board.id + 1000, "X", "X", self.bob)

        self.assertEqual(
            foreign.exception.message.replace(str(board.id), "<id>"),
            missing.exception.message.replace(str(board.id + 1000), "<id>"),
        )
        self.assertEqual(stored_names(self.storage), before)
        self.assertEqual(self._row(board.id).title, "T")

    def test_failed_update_keeps_old_bytes_and_drops_new(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("old.txt", b"old"))
        with patch.object(self.service.store, "update_content", side_effect=RuntimeError("db down")):
            with self.assertRaises(RuntimeError):
                self.service.update_board(board.id, "T2", "D2", self.alice, upload=upload("new.txt", b"new"))
        self.assertEqual(stored_names(self.storage), [board.file_path])
        self.assertEqual(self._row(board.id).file_name, "old.txt")


class TestUpdateStatus(BoardServiceTestCase):
    def test_owner_can_change_status(self) -> None:
        board_id = self.service.create_board("T", "D", self.alice).id
        board = self.service.update_status(board_id, BoardStatus.PRIVATE, owner_id=self.alice)
        self.assertEqual(board.status, "PRIVATE")

    def test_non_owner_rejected_when_scoped(self) -> None:
        board_id = self.service.create_board("T", "D", self.alice).id
        with self.assertRaises(BoardNotFoundError):
            self.service.update_status(board_id, BoardStatus.PRIVATE, owner_id=self.bob)
        self.assertEqual(self._row(board_id).status, "PUBLIC")

    def test_unscoped_store_update(self) -> None:
        board_id = self.service.create_board("T", "D", self.alice).id
        board = self.service.update_status(board_id, BoardStatus.PRIVATE)
        self.assertEqual(board.status, "PRIVATE")


class TestDeleteBoard(BoardServiceTestCase):
    def test_removes_row_and_file(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("a.txt", b"a"))
        self.service.delete_board(board.id, self.alice)
        self.assertIsNone(self._row(board.id))
        self.assertEqual(stored_names(self.storage), [])

    def test_without_attachment_touches_no_files(self) -> None:
        board_id = self.service.create_board("T", "D", self.alice).id
        storage = MagicMock(spec=AttachmentStorage)
        BoardService(self.db, storage).delete_board(board_id, self.alice)
        self.assertIsNone(self._row(board_id))
        storage.remove.assert_not_called()
        storage.save.assert_not_called()

    def test_file_already_gone_is_not_an_error(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("a.txt", b"a"))
        self.storage.remove(board.file_path)
        self.service.delete_board(board.id, self.alice)
        self.assertIsNone(self._row(board.id))

    def test_non_owner_gets_not_found_and_board_survives(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("a.txt", b"a"))
        with self.assertRaises(BoardNotFoundError):
            self.service.delete_board(board.id, self.bob)
        self.assertIsNotNone(self._row(board.id))
        self.assertEqual(stored_names(self.storage), [board.file_path])

    def test_store_delete_reports_zero_rows(self) -> None:
        with self.assertRaises(BoardNotFoundError):
            BoardStore(self.db).delete(4242, self.alice)


class TestDownload(BoardServiceTestCase):
    def test_returns_display_name_and_path(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("notes.txt", b"0123456789"))
        name, path = self.service.get_download(board.id)
        self.assertEqual(name, "notes.txt")
        self.assertEqual(path.read_bytes(), b"0123456789")

    def test_missing_bytes_is_not_found(self) -> None:
        board = self.service.create_board("T", "D", self.alice, upload=upload("notes.txt", b"x"))
        self.storage.remove(board.file_path)
        with self.assertRaises(AttachmentNotFoundError):
            self.service.get_download(board.id)

    def test_partial_legacy_descriptor_is_not_found(self) -> None:
        board_id = self.service.create_board("T", "D", self.alice).id
        row = self._row(board_id)
        row.file_path = "1700000000000-deadbeef.txt"
        self.db.commit()
        with self.assertRaises(AttachmentNotFoundError):
            self.service.get_download(board_id)


if __name__ == "__main__":
    unittest.main()
