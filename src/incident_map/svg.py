"""Serialize draw operations to SVG markup, one group per layer."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from .model import (
    LAYER_BACKGROUND,
    LAYER_BORDERS,
    LAYER_LAND,
    LAYER_ORDER,
    LAYER_SYMBOLS,
    CircleOp,
    DrawOp,
    PathOp,
)
from .paths import fmt, format_path

LAYER_ATTRIBUTES: Dict[str, str] = {
    LAYER_BACKGROUND: 'fill="none" stroke="#c0c0bb" stroke-width="0.5"',
    LAYER_LAND: 'fill="#c0c0bb" stroke="none"',
    LAYER_BORDERS: 'fill="none" stroke="#ffffff" stroke-width="0.5"',
    LAYER_SYMBOLS: 'fill="#8b0000" fill-opacity="0.3" stroke="none"',
}


def _element(op: DrawOp, precision: int) -> str:
    if isinstance(op, CircleOp):
        return (
            f'    <circle data-key="{op.key}" cx="{fmt(op.cx, precision)}" '
            f'cy="{fmt(op.cy, precision)}" r="{fmt(op.r, precision)}" />'
        )
    if isinstance(op, PathOp):
        return f'    <path data-key="{op.key}" d="{format_path(op.commands, precision)}" />'
    raise TypeError(f"Unsupported draw operation: {op!r}")


def to_svg(
    ops: Sequence[DrawOp],
    width: float,
    height: float,
    precision: int = 2,
    title: Optional[str] = None,
) -> str:
    """SVG document for ``ops``; operations keep their given order inside each layer group."""
    groups: Dict[str, List[str]] = {layer: [] for layer in LAYER_ORDER}
    for op in ops:
        if op.layer not in groups:
            raise ValueError(f"Unknown layer '{op.layer}'")
        groups[op.layer].append(_element(op, precision))

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{fmt(width)}" height="{fmt(height)}" '
        f'viewBox="0 0 {fmt(width)} {fmt(height)}">',
    ]
    if title:
        lines.append(f'  <title>{escape(title)}</title>')
    for layer in LAYER_ORDER:
        if not groups[layer]:
            continue
        lines.append(f'  <g class="{layer}" {LAYER_ATTRIBUTES[layer]}>')
        lines.extend(groups[layer])
        lines.append('  </g>')
    lines.append('</svg>')
    return '\n'.join(lines) + '\n'
