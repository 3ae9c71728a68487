# Path: scripts/index_images.py
# Purpose: CLI tool to caption and embed the images in an upload folder.
# Layer: scripts.
# Details: Drives the ingestion pipeline and renders its progress events with tqdm.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tqdm import tqdm

from config import AppSettings, configure_logging
from core.services import build_services


def main() -> int:
    """Run one ingestion pass over a folder of images."""

    parser = argparse.ArgumentParser(description="Caption and embed uploaded images")
    parser.add_argument("--folder", type=Path, default=None, help="Folder containing uploaded images")
    parser.add_argument("--throttle", type=float, default=None, help="Seconds to wait between images")
    parser.add_argument("--embedder", choices=["openai", "hash"], default=None, help="Text embedder to use")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    updates = {}
    if args.folder is not None:
        updates["upload_folder"] = args.folder
    if args.throttle is not None:
        updates["throttle_seconds"] = args.throttle
    if args.embedder is not None:
        updates["embedder"] = settings.embedder.model_copy(update={"name": args.embedder})
    settings = settings.model_copy(update=updates)
    configure_logging(settings.log_level)

    services = build_services(settings)
    bar = None
    final = None
    for event in services.index_builder.run():
        if event.terminal:
            final = event
            continue
        if bar is None:
            bar = tqdm(total=event.total, desc="Indexing images", unit="img")
        bar.update(event.processed - bar.n)
        bar.set_postfix_str(event.current_file or "")
    if bar is not None:
        bar.close()

    if final is None or final.error:
        print(f"Indexing failed: {final.message if final else 'no terminal event'}", file=sys.stderr)
        return 1
    print(f"Processed {final.processed}/{final.total} images; {services.vector_store.size()} indexed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
