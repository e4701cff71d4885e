# main.py
import argparse
import logging
import sys
import time
from config import VERSION, PathConfig
from core.preprocessing.index_builder import build_records
from core.preprocessing.tokenizer import tokenize
from core.search.search_index import IndexUnusableError, SearchIndex
from core.utilities.config_manager import config_manager
from core.utilities.index_loader import load_documents, load_records, render_template, save_records
from ui.cli.console_utils import format_elapsed_time, print_header, print_results

logger = logging.getLogger(__name__)

def load_index(path=None) -> SearchIndex:
    """Build the process-wide search index once from the record file."""
    started = time.perf_counter()
    index = SearchIndex.from_records(load_records(path))
    logger.info(f"Loaded {len(index)} filters in {format_elapsed_time(time.perf_counter() - started)}")
    return index

def run_build(args) -> int:
    false_positive_rate = args.false_positive_rate or config_manager.get_false_positive_rate()
    width = args.width or config_manager.get_counter_width()
    minimize = args.minimize_width or config_manager.get_minimize_width()

    print_header("🔨 Building Search Index")
    print(f"  Documents: {args.input or PathConfig.get_documents_file()}")
    print(f"  False positive rate: {false_positive_rate} | Counter width: {width} bits"
          f" | Minimize width: {'on' if minimize else 'off'}")

    started = time.perf_counter()
    documents = load_documents(args.input)
    records = build_records(documents, false_positive_rate, width,
                            minimize=minimize, show_progress=True)
    output_path = save_records(records, args.output)
    print(f"\n  ✓ Wrote {len(records):,} filters to {output_path}")

    if args.template:
        page_path = render_template(records, args.template, args.page_output)
        print(f"  ✓ Rendered template to {page_path}")

    print(f"  ✓ Elapsed time: {format_elapsed_time(time.perf_counter() - started)}")
    return 0

def run_search(args) -> int:
    index = load_index(args.index)
    query = " ".join(args.words)
    words = query.split() if args.raw else tokenize(query)
    top_k = args.top_k or config_manager.get_top_k()

    started = time.perf_counter()
    results = index.search(words, limit=top_k)
    elapsed = time.perf_counter() - started

    print_header(f"Results for '{query}'")
    print_results(results, elapsed)
    return 0

def run_interactive(args) -> int:
    from ui.cli.interactive_search import interactive_search

    index = load_index(args.index)
    selected = interactive_search(index, initial_query=" ".join(args.words),
                                  top_k=args.top_k or config_manager.get_top_k())
    if selected is not None:
        print(f"\n  {selected.title}\n  {selected.url}")
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Approximate full-text search over spectral bloom filters"
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {VERSION}")
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    build = subparsers.add_parser('build', help='Build the search index from documents')
    build.add_argument('-i', '--input', help='Documents JSON: [{"title", "url", "body"}, ...]')
    build.add_argument('-o', '--output', help='Index file to write (default: data/search_index.json)')
    build.add_argument('-f', '--false-positive-rate', type=float,
                       help='Higher rates give smaller filters and more false positives')
    build.add_argument('-w', '--width', type=int,
                       help='Bits per counter; estimates saturate at 2^width - 1')
    build.add_argument('--minimize-width', action='store_true',
                       help='Replace frequencies by their rank across documents')
    build.add_argument('--template', help='Template containing UNIQUE_SEARCH_INDEX_PLACEHOLDER')
    build.add_argument('--page-output', default='search.html',
                       help='Where to write the rendered template')
    build.set_defaults(handler=run_build)

    for name, handler, help_text in (
        ('search', run_search, 'Rank documents for a query'),
        ('interactive', run_interactive, 'Search as you type'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('words', nargs='*' if name == 'interactive' else '+', help='Query words')
        sub.add_argument('--index', help='Index file (default: data/search_index.json)')
        sub.add_argument('-k', '--top-k', type=int, help='Maximum number of results')
        sub.set_defaults(handler=handler)
    subparsers.choices['search'].add_argument(
        '--raw', action='store_true', help='Use the words as-is instead of tokenizing them'
    )
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config_manager.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        return args.handler(args)
    except (FileNotFoundError, ValueError, IndexUnusableError) as e:
        print(f"\n  ❌ {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)
