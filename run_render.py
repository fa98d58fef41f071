"""
Render a stored message body and print its render tree.

Reads:
  - the file given as first argument, or stdin when omitted

Writes:
  - the JSON render tree on stdout, every available section expanded
"""
import json
import logging
import sys
import time
from pathlib import Path

from src.config.settings import LOG_LEVEL

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("run_render")

# ---------------------------------------------------------------------------
# Load input
# ---------------------------------------------------------------------------
if len(sys.argv) > 1:
    source = Path(sys.argv[1])
    logger.info("Reading body from %s", source)
    content = source.read_text(encoding="utf-8")
else:
    logger.info("Reading body from stdin")
    content = sys.stdin.read()

# ---------------------------------------------------------------------------
# Run pipeline
# ---------------------------------------------------------------------------
from src.processing.pipeline import render_message

start = time.monotonic()
controller = render_message(content, show_source_toggle=True)
elapsed_ms = (time.monotonic() - start) * 1000

message = controller.message
logger.info("classification    : %s", message.classification)
logger.info("html normalized   : %s", message.raw.is_html)
logger.info("was transformed   : %s", message.was_transformed)
logger.info("main lines        : %d", len(message.main_lines))
logger.info("quoted lines      : %d", len(message.quoted_lines))
logger.info("signature lines   : %d", len(message.signature_lines))
logger.info("toggles           : %s", ", ".join(controller.visible_toggles) or "-")
logger.info("Pipeline completed in %.2f ms", elapsed_ms)

# ---------------------------------------------------------------------------
# Expand every section and print
# ---------------------------------------------------------------------------
if controller.has_quoted_toggle:
    controller.toggle_quoted()
if controller.has_signature_toggle:
    controller.toggle_signature()
if controller.has_source_toggle:
    controller.toggle_source()

json.dump(controller.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
sys.stdout.write("\n")
