"""Interactive node picker: the input loop that drives selection and rendering.

The loop is single-threaded.  Each iteration redraws the screen, then waits
at most one tick for the next key sequence and dispatches it.  Input is
consumed strictly one sequence per iteration, in arrival order.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass
from typing import Sequence

from tssh.nodes.render import PickerTheme, default_theme, render_picker
from tssh.nodes.selection import PAGE_SIZE, NodeSelection
from tssh.nodes.types import NodeRecord
from tssh.tui.keybindings import PickerKeybindingsManager, get_picker_keybindings
from tssh.tui.keys import is_printable_input
from tssh.tui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START
from tssh.tui.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

TICK_SECONDS = 0.1

_CLEAR_TO_EOL = "\x1b[K"
_CLEAR_TO_EOS = "\x1b[J"


@dataclass(frozen=True)
class PickerResult:
    """Outcome of a picker session: a confirmed node, or cancellation."""

    node: NodeRecord | None = None

    @property
    def cancelled(self) -> bool:
        return self.node is None


class NodePicker:
    """Full-screen node picker bound to a :class:`Terminal`."""

    def __init__(
        self,
        nodes: Sequence[NodeRecord],
        terminal: Terminal,
        *,
        initial_node: str | None = None,
        initial_filter: str = "",
        theme: PickerTheme | None = None,
        tick: float = TICK_SECONDS,
        page_size: int = PAGE_SIZE,
        keybindings: PickerKeybindingsManager | None = None,
    ) -> None:
        self.selection = NodeSelection(nodes)
        if initial_node:
            self.selection.select_name(initial_node)
        if initial_filter:
            self.selection.set_filter(initial_filter)

        self._terminal = terminal
        self._theme = theme if theme is not None else default_theme()
        self._tick = tick
        self._page_size = page_size
        self._keybindings = keybindings
        self._result: PickerResult | None = None
        self._needs_clear = True

    @property
    def result(self) -> PickerResult | None:
        """``None`` while running, then the session outcome."""
        return self._result

    # -- input ----------------------------------------------------------------

    def handle_input(self, data: str) -> None:
        """Apply one key sequence to the picker state."""
        if self._result is not None:
            return

        if data.startswith(BRACKETED_PASTE_START):
            self._handle_paste(data)
            return

        kb = self._keybindings or get_picker_keybindings()
        action = kb.action_for(data)
        sel = self.selection

        if action == "cancel":
            self._result = PickerResult()
        elif action == "confirm":
            node = sel.current()
            if node is not None:
                # Copy out of the selection state
                self._result = PickerResult(node=dataclasses.replace(node))
        elif action == "selectUp":
            sel.move_up()
        elif action == "selectDown":
            sel.move_down()
        elif action == "selectPageUp":
            sel.page_up(self._page_size)
        elif action == "selectPageDown":
            sel.page_down(self._page_size)
        elif action == "selectStart":
            sel.move_to_start()
        elif action == "selectEnd":
            sel.move_to_end()
        elif action == "deleteCharBackward":
            sel.pop_char()
        elif action == "clearFilter":
            sel.clear_filter()
        elif is_printable_input(data):
            sel.push_char(data)

    def _handle_paste(self, data: str) -> None:
        text = data[len(BRACKETED_PASTE_START):]
        if text.endswith(BRACKETED_PASTE_END):
            text = text[: -len(BRACKETED_PASTE_END)]
        text = "".join(ch for ch in text if ch.isprintable())
        if text:
            self.selection.set_filter(self.selection.filter_text + text)

    def _on_resize(self) -> None:
        self._needs_clear = True

    # -- output ---------------------------------------------------------------

    def draw(self) -> None:
        """Paint the current state over the whole screen."""
        lines = render_picker(
            self.selection, self._terminal.columns, self._terminal.rows, self._theme
        )
        if self._needs_clear:
            self._terminal.clear_screen()
            self._needs_clear = False
        self._terminal.move_home()
        self._terminal.write(
            (_CLEAR_TO_EOL + "\r\n").join(lines) + _CLEAR_TO_EOL + _CLEAR_TO_EOS
        )

    # -- loop -----------------------------------------------------------------

    async def run(self) -> PickerResult:
        """Run the session until the user confirms or cancels.

        The terminal is restored on every exit path, including errors raised
        while starting it or while drawing.
        """
        queue: asyncio.Queue[str] = asyncio.Queue()
        loop = asyncio.get_running_loop()

        try:
            self._terminal.start(queue.put_nowait, self._on_resize)
            last_tick = loop.time()

            while self._result is None:
                self.draw()

                timeout = max(self._tick - (loop.time() - last_tick), 0.0)
                data = await _poll(queue, timeout)
                if data is not None:
                    self.handle_input(data)

                if loop.time() - last_tick >= self._tick:
                    last_tick = loop.time()
        finally:
            self._terminal.stop()

        logger.debug(
            "picker finished: %s",
            "cancelled" if self._result.cancelled else self._result.node.name,
        )
        return self._result


async def _poll(queue: asyncio.Queue[str], timeout: float) -> str | None:
    """Wait up to *timeout* seconds for the next input sequence."""
    if not queue.empty():
        return queue.get_nowait()
    try:
        return await asyncio.wait_for(queue.get(), timeout)
    except asyncio.TimeoutError:
        return None


async def pick_node(
    nodes: Sequence[NodeRecord],
    *,
    initial_node: str | None = None,
    initial_filter: str = "",
    terminal: Terminal | None = None,
    theme: PickerTheme | None = None,
) -> PickerResult:
    """Show the picker on the controlling terminal and return the outcome."""
    picker = NodePicker(
        nodes,
        terminal if terminal is not None else ProcessTerminal(),
        initial_node=initial_node,
        initial_filter=initial_filter,
        theme=theme,
    )
    return await picker.run()
