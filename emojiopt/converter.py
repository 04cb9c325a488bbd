"""
converter.py
------------
Drives the transcoder over the whole dataset.

• Splits the records into contiguous batches (50 by default)
• Transcodes every record of a batch concurrently, in worker threads
• Waits for the whole batch to settle before starting the next one
• Reports progress and bytes saved after each batch
"""

import asyncio
import binascii
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from tqdm import tqdm

from emojiopt import config
from emojiopt.datauri import EmbeddedImage
from emojiopt.errors import TranscodeError
from emojiopt.transcode import to_webp

WEBP_MIME = "image/webp"


@dataclass
class SizeTally:
    """Bytes before and after transcoding, summed over a run."""

    before: int = 0
    after: int = 0

    def add(self, before: int, after: int) -> None:
        self.before += before
        self.after += after

    @property
    def saved(self) -> int:
        return self.before - self.after

    @property
    def percent_saved(self) -> float:
        if not self.before:
            return 0.0
        return (1 - self.after / self.before) * 100


# (processed, total, tally) after each batch
ProgressCallback = Callable[[int, int, SizeTally], None]


def format_size(num: int) -> str:
    if abs(num) < 1000:
        return f"{num} B"
    return tqdm.format_sizeof(num, "B", 1000)


def chunked(records: Sequence, size: int) -> Iterator[Tuple[int, Sequence]]:
    """Yield ``(start_index, batch)`` for contiguous batches of at most *size*."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    for start in range(0, len(records), size):
        yield start, records[start:start + size]


def convert_record(record: dict, transcode: Callable[[bytes], bytes] = to_webp) -> Tuple[dict, int, int]:
    """Return ``(record, before, after)``; records without an embedded image come back as-is."""
    try:
        image = EmbeddedImage.parse(record.get("emoji"))
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"undecodable base64 payload ({e})") from e
    if image is None:
        return record, 0, 0

    encoded = transcode(image.payload)
    converted = dict(record)
    converted["emoji"] = EmbeddedImage(WEBP_MIME, encoded).to_uri()
    return converted, len(image.payload), len(encoded)


async def convert_batch(batch: Sequence[dict], start: int,
                        transcode: Callable[[bytes], bytes] = to_webp) -> List[Tuple[dict, int, int]]:
    results = await asyncio.gather(
        *(asyncio.to_thread(convert_record, record, transcode) for record in batch),
        return_exceptions=True,
    )
    # every task has settled; surface the first failure by position
    for offset, result in enumerate(results):
        if isinstance(result, BaseException):
            raise TranscodeError(start + offset, result) from result
    return results


async def convert_dataset(records: List[dict],
                          batch_size: int = config.BATCH_SIZE,
                          transcode: Callable[[bytes], bytes] = to_webp,
                          on_batch: Optional[ProgressCallback] = None) -> SizeTally:
    """Convert *records* in place and return the size tally for the run."""
    tally = SizeTally()
    total = len(records)
    processed = 0

    for start, batch in chunked(records, batch_size):
        results = await convert_batch(batch, start, transcode)
        for offset, (record, before, after) in enumerate(results):
            records[start + offset] = record
            tally.add(before, after)

        processed += len(batch)
        if on_batch:
            on_batch(processed, total, tally)

    return tally
