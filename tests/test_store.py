from datetime import datetime

from .test_base import BaseChatMdTest
from chatmd import DocumentError, Role, Turn, load_conversation

NOW = datetime(2024, 12, 25, 12, 34, 56)


class TestChatStore(BaseChatMdTest):
    def test_new_document_name(self):
        self.assertEqual(self.store.new_document_name(NOW), "chat_20241225_123456.md")

    def test_ensure_creates_nested_directory(self):
        from chatmd import ChatStore

        nested = ChatStore(self.chats_dir / "a" / "b")
        nested.ensure()
        nested.ensure()  # already there
        self.assertTrue(nested.root.is_dir())

    def test_list_documents_only_markdown_files(self):
        (self.chats_dir / "b.md").write_text("")
        (self.chats_dir / "a.md").write_text("")
        (self.chats_dir / "notes.txt").write_text("")
        (self.chats_dir / "dir.md").mkdir()

        self.assertEqual(
            self.store.list_documents(),
            sorted(["a.md", "b.md", self.document.name]),
        )

    def test_create_never_reuses_a_name(self):
        first = self.store.create(NOW)
        second = self.store.create(NOW)
        try:
            self.assertEqual(first.name, "chat_20241225_123456.md")
            self.assertEqual(second.name, "chat_20241225_123456_1.md")
            self.assertEqual(second.turns, [])
        finally:
            first.close()
            second.close()


class TestChatDocument(BaseChatMdTest):
    def test_append_writes_and_records(self):
        turn = self.document.append(Role.USER, "Hi")

        self.assertEqual(turn, Turn(Role.USER, "Hi"))
        self.assertEqual(self.document.turns, [turn])
        self.assertEqual(self.document.messages, [{"role": "user", "content": "Hi"}])
        # flushed straight away
        self.assertEqual(self.document.path.read_text(), "## User\n\nHi\n\n")

    def test_resume_and_append(self):
        """Reopening keeps earlier bytes and adds exactly one turn"""
        self.document.append(Role.USER, "Hi")
        self.document.append(Role.ASSISTANT, "Hello there")
        self.document.close()
        before = self.document.path.read_bytes()

        with self.store.open(self.document.name) as resumed:
            self.assertEqual(resumed.turns, self.document.turns)
            resumed.append(Role.USER, "Bye")

        after = self.document.path.read_bytes()
        self.assertTrue(after.startswith(before))
        self.assertEqual(
            load_conversation(self.document.path),
            [
                Turn(Role.USER, "Hi"),
                Turn(Role.ASSISTANT, "Hello there"),
                Turn(Role.USER, "Bye"),
            ],
        )

    def test_open_missing_document_starts_empty(self):
        with self.store.open("chat_missing.md") as document:
            self.assertEqual(document.turns, [])
            self.assertTrue(document.path.exists())

    def test_context_manager_closes(self):
        with self.store.create(NOW) as document:
            self.assertFalse(document.closed)
        self.assertTrue(document.closed)
        document.close()  # closing twice is fine


class TestLineBreaks(BaseChatMdTest):
    def test_carriage_returns_match_after_reload(self):
        """Memory and disk agree on messages holding CR or CRLF breaks"""
        turn = self.document.append(Role.ASSISTANT, "line1\r\nline2\rline3")
        self.document.close()

        self.assertEqual(turn.content, "line1\nline2\nline3")
        self.assertEqual(load_conversation(self.document.path), [turn])
        self.assertEqual(self.document.path.read_bytes(), b"## Assistant\n\nline1\nline2\nline3\n\n")


class TestUndecodableDocument(BaseChatMdTest):
    def test_open_rejects_non_utf8_bytes(self):
        (self.chats_dir / "bad.md").write_bytes(b"## User\n\n\xff\xfe hi\n\n")

        with self.assertRaises(DocumentError):
            self.store.open("bad.md")
