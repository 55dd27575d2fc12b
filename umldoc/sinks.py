# umldoc/sinks.py

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import List, Optional

import requests

from umldoc.config import PLANTUML_SERVER_URL, RENDER_TIMEOUT_SECONDS
from umldoc.uml.diagram import UMLDiagram
from umldoc.validate import validate_plantuml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# PlantUML text encoding (deflate + PlantUML's own base64 alphabet)
# ---------------------------------------------------------------------------

_PLANTUML_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"


def _encode3bytes(b1: int, b2: int, b3: int) -> str:
    c1 = b1 >> 2
    c2 = ((b1 & 0x3) << 4) | (b2 >> 4)
    c3 = ((b2 & 0xF) << 2) | (b3 >> 6)
    c4 = b3 & 0x3F
    return "".join(_PLANTUML_ALPHABET[c & 0x3F] for c in (c1, c2, c3, c4))


def encode_plantuml(text: str) -> str:
    """Encode PlantUML text for a server URL."""
    data = zlib.compress(text.encode("utf-8"))[2:-4]  # raw deflate
    padded = data + b"\x00" * (-len(data) % 3)
    return "".join(
        _encode3bytes(padded[i], padded[i + 1], padded[i + 2]) for i in range(0, len(padded), 3)
    )


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


class SvgRenderSink:
    """Hands finished diagram text to a PlantUML server and returns the SVG."""

    def __init__(self, server_url: Optional[str] = None, timeout: float = RENDER_TIMEOUT_SECONDS) -> None:
        self.server_url = (server_url or PLANTUML_SERVER_URL).rstrip("/")
        self.timeout = timeout

    def render(self, plantuml: str) -> str:
        ok, errors = validate_plantuml(plantuml)
        if not ok:
            raise ValueError("Invalid PlantUML: " + "; ".join(errors[:10]))

        url = f"{self.server_url}/svg/{encode_plantuml(plantuml)}"
        try:
            r = requests.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise RuntimeError(f"SVG render failed: {type(e).__name__}: {e}") from e

        svg = r.text
        if "<svg" not in svg[:500]:
            raise RuntimeError(f"PlantUML server returned unexpected content: {svg[:200]}")
        return svg

    def accept(self, diagram: UMLDiagram) -> str:
        return self.render(diagram.render())


class PumlFileSink:
    """
    Writes each diagram to <output_dir>/<diagram.file_path>, plus an .svg
    companion when an SVG sink is configured.
    """

    def __init__(self, output_dir: Path, svg_sink: Optional[SvgRenderSink] = None) -> None:
        self.output_dir = Path(output_dir)
        self.svg_sink = svg_sink

    def accept(self, diagram: UMLDiagram) -> List[Path]:
        plantuml = diagram.render()
        puml_path = self.output_dir / diagram.file_path
        puml_path.parent.mkdir(parents=True, exist_ok=True)
        puml_path.write_text(plantuml, encoding="utf-8")
        written = [puml_path]
        logger.info("Saved PlantUML to %s", puml_path)

        if self.svg_sink is not None:
            svg_path = puml_path.with_suffix(".svg")
            svg_path.write_text(self.svg_sink.render(plantuml), encoding="utf-8")
            written.append(svg_path)
            logger.info("Saved SVG to %s", svg_path)
        return written
