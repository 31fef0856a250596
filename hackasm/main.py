import logging
import sys
from typing import List
from rich.markup import escape
from textual.app import App, ComposeResult
from textual.widgets import RichLog, Input, Static, Footer
from .assembler import Assembler
from .console import Console
from .errors import AssemblyError


logger = logging.getLogger(__name__)


class HackAsmApp(App):
    CSS = """
    RichLog#output {
        height: 60%;
        border: tall white;
        margin: 1;
        background: black;
        min-height: 10;
    }
    Input {
        height: 10%;
        margin: 1;
        &:focus {
            border: heavy green;
        }
    }
    Static#symbols {
        height: 25%;
        border: round green;
        padding: 1;
        background: darkblue;
        min-height: 4;
    }
    Footer {
        height: 5%;
    }
    """

    BINDINGS = [
        ("ctrl+r", "reset", "Reset"),
        ("escape", "quit", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.source: List[str] = []
        self.words: List[str] = []
        self.assembler = Assembler(Console(app=self))

    def compose(self) -> ComposeResult:
        yield RichLog(id="output", markup=True)
        yield Input(placeholder="Enter a line of Hack assembly")
        yield Static(id="symbols")
        yield Footer()

    def on_mount(self) -> None:
        logger.info("TUI starting...")
        self.query_one(Input).focus()
        self.update_symbols()

    def write_output(self, word: str) -> None:
        self.words.append(word)
        self.query_one(RichLog).write(f"{len(self.words) - 1:5d}  {word}")

    def write_error(self, message: str) -> None:
        logger.debug(f"Assembly error: {message}")
        self.query_one(RichLog).write(f"[red]Error: {escape(message)}[/red]")

    def update_symbols(self) -> None:
        self.query_one("#symbols", Static).update(escape(repr(self.assembler.symbols)))

    def reassemble(self) -> None:
        """Assemble the whole session from a fresh symbol table."""
        self.words = []
        self.query_one(RichLog).clear()
        self.assembler = Assembler(Console(app=self))
        self.assembler.assemble("\n".join(self.source))
        self.update_symbols()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        logger.debug(f"Input submitted: {event.value}")
        line = event.value
        event.input.value = ""
        candidate = self.source + [line]
        try:
            Assembler(Console(capture_output=True)).assemble("\n".join(candidate))
        except AssemblyError as e:
            logger.warning(f"Discarded line: {line}")
            self.assembler.console.error(str(e))
            return
        self.source = candidate
        self.reassemble()

    def action_reset(self) -> None:
        logger.info("Resetting session")
        self.source = []
        self.reassemble()


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('hackasm_tui.log', mode='w'),
            logging.StreamHandler(sys.stderr)
        ]
    )
    HackAsmApp().run()


if __name__ == "__main__":
    main()
