# ui/cli/console_utils.py
from typing import Sequence
from config import FRAME_WIDTH
from core.search.search_index import ResultEntry

def print_header(title):
    """Print a clean header with title."""
    print("\n" + "═" * FRAME_WIDTH)
    print(f"  {title}")
    print("═" * FRAME_WIDTH)

def format_elapsed_time(seconds: float) -> str:
    """Format elapsed time in a human-readable way."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        seconds = seconds % 60
        return f"{minutes}m {seconds:.0f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"

def format_result_line(rank: int, result: ResultEntry, width: int = FRAME_WIDTH) -> str:
    """One ranked result as '  1. Title (url)  score=3', truncated to width."""
    line = f"{rank:3d}. {result.title} ({result.url})"
    score = f"  score={result.score}"
    if len(line) + len(score) > width:
        line = line[:max(0, width - len(score) - 1)] + "…"
    return line + score

def print_results(results: Sequence[ResultEntry], elapsed: float):
    """Print ranked results with a timing footer."""
    if not results:
        print("\n  No matching documents.")
    else:
        print()
        for rank, result in enumerate(results, 1):
            print(format_result_line(rank, result))
    print(f"\n  {len(results)} result(s) in {format_elapsed_time(elapsed)}")
