from typing import List, Optional, TextIO
import sys


class Console:
    """
    Output sink for encoded words.
    >>> c = Console()
    >>> c.write_word("0000000000000101")
    0000000000000101
    >>> c = Console(capture_output=True)
    >>> c.write_word("1110101010000111")
    >>> c.output_buffer
    ['1110101010000111']
    """
    def __init__(self, app: Optional[object] = None, capture_output: bool = False,
                 stream: Optional[TextIO] = None) -> None:
        """
        :param app: Optional Textual app that receives words and diagnostics.
        :param capture_output: If True, keep words in output_buffer and
            diagnostics in error_buffer instead of writing them.
        :param stream: Destination for words; stdout when omitted.
        """
        self.app = app
        self.stream = stream
        self.capture_output = capture_output
        self.output_buffer: Optional[List[str]] = [] if capture_output else None
        self.error_buffer: Optional[List[str]] = [] if capture_output else None

    def write_word(self, word: str) -> None:
        """
        >>> from io import StringIO
        >>> out = StringIO()
        >>> c = Console(stream=out)
        >>> c.write_word("0000000000010000")
        >>> c.write_word("1110001100001000")
        >>> out.getvalue()
        '0000000000010000\\n1110001100001000\\n'
        """
        if self.capture_output:
            self.output_buffer.append(word)
        elif self.app:
            self.app.write_output(word)
        else:
            print(word, file=self.stream or sys.stdout)

    def error(self, message: str) -> None:
        """
        Report a diagnostic to stderr, the Textual app, or error_buffer.
        >>> from unittest.mock import Mock
        >>> app = Mock()
        >>> Console(app=app).error("oops")
        >>> app.write_error.assert_called_with("oops")
        >>> c = Console(capture_output=True)
        >>> c.error("oops")
        >>> c.error_buffer
        ['oops']
        """
        if self.capture_output:
            self.error_buffer.append(message)
        elif self.app:
            self.app.write_error(message)
        else:
            print(f"error: {message}", file=sys.stderr)
