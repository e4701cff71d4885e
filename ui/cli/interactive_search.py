# ui/cli/interactive_search.py
"""
Search-as-you-type terminal interface.
Re-ranks the whole index on every keystroke; arrow keys move the selection
and Enter returns the selected document.
"""
import shutil
import time
from typing import List, Optional
from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.styles import Style
from core.preprocessing.tokenizer import tokenize
from core.search.search_index import ResultEntry, SearchIndex
from ui.cli.console_utils import format_elapsed_time, format_result_line, print_header

MAX_VISIBLE_RESULTS = 20
MIN_COLUMNS = 60
MIN_LINES = 25

def render_results(results: List[ResultEntry], selected_idx: int,
                   max_rows: int = MAX_VISIBLE_RESULTS) -> str:
    """Text of the results pane with an arrow on the selected row."""
    if not results:
        return "No results"

    lines = []
    for i, result in enumerate(results[:max_rows]):
        prefix = "→" if i == selected_idx else " "
        lines.append(f"{prefix}{format_result_line(i + 1, result)}")

    if len(results) > max_rows:
        lines.append(f"  ... and {len(results) - max_rows} more")
    return "\n".join(lines)

def interactive_search(index: SearchIndex, initial_query: str = "",
                       top_k: Optional[int] = None) -> Optional[ResultEntry]:
    """
    Run the interactive UI.

    Returns:
        The selected result, or None if cancelled
    """
    terminal_size = shutil.get_terminal_size()
    if terminal_size.lines < MIN_LINES or terminal_size.columns < MIN_COLUMNS:
        print(f"\n  ⚠️  Terminal too small ({terminal_size.columns}x{terminal_size.lines})")
        print(f"  Minimum: {MIN_COLUMNS}x{MIN_LINES}. Using simple search...")
        return simple_search_fallback(index, initial_query, top_k)

    results: List[ResultEntry] = []
    selected_idx = 0

    results_control = FormattedTextControl(text="Start typing to search...")
    status_control = FormattedTextControl(text="")

    def perform_search(buffer: Buffer):
        """Re-rank on every edit of the query"""
        nonlocal results, selected_idx
        started = time.perf_counter()
        words = tokenize(buffer.text)
        results = index.search(words, limit=top_k)
        elapsed = time.perf_counter() - started
        selected_idx = 0

        if not words:
            results_control.text = "Start typing to search..."
        else:
            results_control.text = render_results(results, selected_idx)
        status_control.text = (
            f"{len(results)} results in {format_elapsed_time(elapsed)}"
            " | ↑↓ Navigate | Enter=Select | Esc=Cancel"
        )

    query_buffer = Buffer(multiline=False, on_text_changed=perform_search)

    kb = KeyBindings()

    @kb.add('up')
    def move_up(event):
        nonlocal selected_idx
        if results:
            selected_idx = max(0, selected_idx - 1)
            results_control.text = render_results(results, selected_idx)

    @kb.add('down')
    def move_down(event):
        nonlocal selected_idx
        if results:
            selected_idx = min(min(len(results), MAX_VISIBLE_RESULTS) - 1, selected_idx + 1)
            results_control.text = render_results(results, selected_idx)

    @kb.add('enter')
    def select(event):
        event.app.exit(result=results[selected_idx] if results else None)

    @kb.add('c-c')
    @kb.add('escape')
    def cancel(event):
        event.app.exit(result=None)

    layout = Layout(
        HSplit([
            Window(height=1, content=FormattedTextControl(text="Search query:"),
                   style="class:query-label"),
            Window(height=1, content=BufferControl(buffer=query_buffer),
                   style="class:query-field"),
            Window(height=1, content=FormattedTextControl(text="Results:"),
                   style="class:results-label"),
            Window(height=MAX_VISIBLE_RESULTS + 1, content=results_control,
                   style="class:results-list", always_hide_cursor=True),
            Window(height=1, content=status_control, style="class:status-bar")
        ])
    )

    style = Style.from_dict({
        'query-label': 'bold ansiblue',
        'query-field': 'bg:ansiblack ansigreen',
        'results-label': 'bold ansiblue',
        'results-list': 'bg:ansiblack ansiwhite',
        'status-bar': 'reverse',
    })

    app = Application(layout=layout, key_bindings=kb, style=style,
                      full_screen=False, mouse_support=False)
    app.layout.focus(query_buffer)

    # Setting the text fires on_text_changed, so the first search runs here
    if initial_query:
        query_buffer.text = initial_query
        query_buffer.cursor_position = len(initial_query)

    return app.run()

def simple_search_fallback(index: SearchIndex, query: str = "",
                           top_k: Optional[int] = None) -> Optional[ResultEntry]:
    """Line-based search loop used when the terminal is too small."""
    while True:
        if not query:
            query = input("\n  Search (empty to quit): ").strip()
            if not query:
                return None

        results = index.search(tokenize(query), limit=top_k)
        if not results:
            print(f"\n  ❌ No results found for '{query}'")
            query = ""
            continue

        print_header(f"Search Results for '{query}'")
        for rank, result in enumerate(results, 1):
            print(format_result_line(rank, result))

        choice = input(f"\n  Select [1-{len(results)}], new query, or empty to quit: ").strip()
        if not choice:
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(results):
            return results[int(choice) - 1]
        query = choice
