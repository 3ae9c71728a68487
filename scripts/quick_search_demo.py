# Path: scripts/quick_search_demo.py
# Purpose: Simple CLI to index an upload folder and run one query against it.
# Layer: scripts.
# Details: The vector store lives in memory only, so indexing and searching happen in the same process.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings, configure_logging
from core.models.domain import SearchMode, SearchQuery
from core.services import build_services


def main() -> None:
    """Execute a quick search from the command line."""

    parser = argparse.ArgumentParser(description="Run a quick search against uploaded photos")
    parser.add_argument("--text", type=str, required=True, help="Text query to search for")
    parser.add_argument("--folder", type=Path, default=None, help="Folder containing uploaded images")
    parser.add_argument("--basic", action="store_true", help="Skip indexing and sample photos at random")
    parser.add_argument("--embedder", choices=["openai", "hash"], default=None, help="Text embedder to use")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    updates = {}
    if args.folder is not None:
        updates["upload_folder"] = args.folder
    if args.embedder is not None:
        updates["embedder"] = settings.embedder.model_copy(update={"name": args.embedder})
    settings = settings.model_copy(update=updates)
    configure_logging(settings.log_level)

    services = build_services(settings)
    if not args.basic:
        for event in services.index_builder.run():
            if event.error:
                print(f"Indexing failed: {event.message}", file=sys.stderr)

    mode = SearchMode.BASIC if args.basic else SearchMode.SMART
    response = services.search_pipeline.search(SearchQuery(text=args.text, mode=mode))

    print(f"searchType={response.mode.value}")
    for result in response.results:
        score = f"{result.confidence:.3f}" if result.confidence is not None else "n/a"
        print(f"file={result.filename} score={score} caption={result.caption}")


if __name__ == "__main__":
    main()
