import tempfile
import unittest
from unittest.mock import Mock, patch
from pathlib import Path
from chatmd import ChatStore, ChatCLI, OpenAIClientWrapper


def stream_of(*pieces):
    """Fake streaming response yielding one chunk per text piece."""
    return [Mock(choices=[Mock(delta=Mock(content=piece))]) for piece in pieces]


class BaseChatMdTest(unittest.TestCase):
    def setUp(self):
        # Create a temporary directory for chat documents
        self._tmp = tempfile.TemporaryDirectory()
        self.chats_dir = Path(self._tmp.name) / "chats"
        self.store = ChatStore(self.chats_dir)
        self.store.ensure()

        # Patch print to suppress streamed output
        self.print_patcher = patch('builtins.print')
        self.print_patcher.start()

        # Mock the OpenAI client
        self.mock_client = Mock()
        self.mock_wrapper = OpenAIClientWrapper(self.mock_client)

        # Create a test document
        self.document = self.store.create()

        # Create ChatCLI instance
        self.chat_cli = ChatCLI(self.document, self.mock_wrapper, "o1")

    def tearDown(self):
        self.print_patcher.stop()
        self.document.close()
        self._tmp.cleanup()
