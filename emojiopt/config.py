"""Fixed run settings."""

from pathlib import Path

# ─── Configuration ──────────────────────────────────────────────────────────
SOURCE_PATH      = Path("data/applemojis.js")
BACKUP_PATH      = Path("backup/applemojis.backup.js")
OUTPUT_PATH      = Path("output/applemojis.optimized.js")
EXPORT_NAME      = "applemojis"
BATCH_SIZE       = 50                          # records transcoded concurrently

# Transcoder output
CANVAS_SIZE      = (42, 42)
WEBP_QUALITY     = 75
WEBP_ALPHA       = 80
WEBP_METHOD      = 6                           # 0 (fast) … 6 (smallest)
# ────────────────────────────────────────────────────────────────────────────
