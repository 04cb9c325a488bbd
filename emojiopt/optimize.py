#!/usr/bin/env python3
"""
optimize.py
-----------
Shrink the embedded emoji images of the frontend dataset to 42×42 WebP.

• Reads data/applemojis.js  (export default [ {emoji: "data:image/png;base64,…"}, … ])
• Backs the untouched dataset up to backup/applemojis.backup.js first
• Converts every embedded image, 50 at a time, with a live progress bar
• Writes output/applemojis.optimized.js and prints how much was saved
"""

import asyncio
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from emojiopt import config
from emojiopt.converter import ProgressCallback, SizeTally, convert_dataset, format_size
from emojiopt.dataset import load_dataset, read_module, write_backup, write_output


class TqdmReporter:
    """Progress sink backed by a tqdm bar; call it once per finished batch."""

    def __init__(self, total: int):
        self.bar = tqdm(total=total, desc="Emoji Optimize", unit="emoji")
        self.bar.set_postfix(saved=format_size(0))

    def __call__(self, processed: int, total: int, tally: SizeTally) -> None:
        self.bar.update(min(processed, total) - self.bar.n)
        self.bar.set_postfix(saved=format_size(tally.saved))

    def close(self) -> None:
        self.bar.close()


def print_summary(tally: SizeTally, output_path: Path) -> None:
    print("\n✅  Optimization Complete!\n")
    print(f"Original Size:  {format_size(tally.before)}")
    print(f"Optimized Size: {format_size(tally.after)}")
    print(f"📉 Saved:        {format_size(tally.saved)} ({tally.percent_saved:.1f}%)")
    print(f"💾 Output saved to: {output_path}\n")


async def optimize(records: List[dict],
                   backup_path: Path = config.BACKUP_PATH,
                   output_path: Path = config.OUTPUT_PATH,
                   export_name: str = config.EXPORT_NAME,
                   batch_size: int = config.BATCH_SIZE,
                   on_batch: Optional[ProgressCallback] = None) -> SizeTally:
    """Back up *records*, convert a copy and write it out. *records* is left untouched."""
    data = load_dataset(records)
    write_backup(records, backup_path, export_name)

    tally = await convert_dataset(data, batch_size=batch_size, on_batch=on_batch)

    write_output(data, output_path, export_name)
    return tally


def run(source_path: Path = config.SOURCE_PATH,
        backup_path: Path = config.BACKUP_PATH,
        output_path: Path = config.OUTPUT_PATH,
        export_name: str = config.EXPORT_NAME,
        batch_size: int = config.BATCH_SIZE) -> SizeTally:
    if not source_path.exists():
        raise SystemExit(f"❌  Source dataset {source_path} not found.")

    try:
        _, records = read_module(source_path)
    except ValueError as e:
        raise SystemExit(f"❌  Could not parse {source_path}: {e}")
    if not isinstance(records, list):
        raise SystemExit(f"❌  {source_path} must export a list of emoji records.")

    reporter = TqdmReporter(len(records))
    try:
        tally = asyncio.run(optimize(records, backup_path, output_path,
                                     export_name, batch_size, on_batch=reporter))
    finally:
        reporter.close()

    print_summary(tally, output_path)
    return tally


def main() -> None:
    run()


if __name__ == "__main__":
    main()
