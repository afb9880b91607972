#!/usr/bin/env python3
"""Render the proportional symbol incident map (SVG + draw-op JSON)."""
from __future__ import annotations

import argparse
import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from . import config
from .errors import MissingDataError
from .incidents import load_incidents
from .layers import render_map
from .model import BorderMesh, DrawOp, IncidentRecord, LandCollection
from .projection import GeoProjector
from .scales import RadiusScale
from .svg import to_svg
from .topology import load_world

SVG_NAME = 'incident_map.svg'
DRAW_OPS_NAME = 'draw_ops.json'


def load_snapshots(args: argparse.Namespace) -> Dict[str, object]:
    """Fetch world geometry and incidents concurrently; both results come back together."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        world_future = pool.submit(
            load_world,
            args.topology,
            args.land_object,
            args.border_object,
        )
        incidents_future = pool.submit(
            load_incidents,
            args.incidents,
            args.magnitude_column,
            args.coordinates_column,
            args.coordinates_order,
            args.id_column,
        )
        land, borders = world_future.result()
        records = incidents_future.result()
    return {'land': land, 'borders': borders, 'records': records}


def render(
    land: Optional[LandCollection],
    borders: Optional[BorderMesh],
    records: Optional[Sequence[IncidentRecord]],
    width: float = config.WIDTH,
    height: float = config.HEIGHT,
    max_radius: float = config.MAX_RADIUS,
    graticule_step: float = config.GRATICULE_STEP,
) -> List[DrawOp]:
    """Run one render pass once both snapshots are present."""
    missing = [
        name
        for name, value in (('land', land), ('borders', borders), ('incidents', records))
        if value is None
    ]
    if missing:
        raise MissingDataError(f"Cannot render before all snapshots load; missing: {', '.join(missing)}")
    projector = GeoProjector(width=width, height=height)
    scale = RadiusScale.from_records(records, range_max=max_radius)
    if scale.is_degenerate:
        print('⚠️  No positive magnitudes in incident snapshot; all symbols have radius 0')
    return render_map(land, borders, records, projector, scale, graticule_step)


def _write_svg(ops: Sequence[DrawOp], output_dir: Path, width: float, height: float) -> Path:
    svg_path = output_dir / SVG_NAME
    svg_path.write_text(to_svg(ops, width, height, title=config.MAP_TITLE), encoding='utf-8')
    print(f"✔️  Wrote {config.display_path(svg_path)}")
    return svg_path


def _write_draw_ops(ops: Sequence[DrawOp], output_dir: Path) -> Path:
    ops_path = output_dir / DRAW_OPS_NAME
    ops_path.write_text(json.dumps([op.to_dict() for op in ops]), encoding='utf-8')
    print(f"✔️  Wrote {config.display_path(ops_path)}")
    return ops_path


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}") from None
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text!r}")
    return value


def _default_source(processed: Path, remote: str) -> str:
    return str(processed) if processed.exists() else remote


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Render a proportional symbol map of incidents.')
    parser.add_argument(
        '--topology',
        default=_default_source(config.PROCESSED_TOPOLOGY_FILE, config.TOPOLOGY_SOURCE),
        help='TopoJSON path or URL (default: the build_incident_dataset copy if present, else the remote source)',
    )
    parser.add_argument('--land-object', default=config.LAND_OBJECT)
    parser.add_argument('--border-object', default=config.BORDER_OBJECT)
    parser.add_argument(
        '--incidents',
        default=_default_source(config.PROCESSED_INCIDENTS_FILE, config.INCIDENTS_SOURCE),
        help='Incident CSV path or URL (default: the build_incident_dataset copy if present, else the remote source)',
    )
    parser.add_argument('--magnitude-column', default=config.MAGNITUDE_COLUMN)
    parser.add_argument('--coordinates-column', default=config.COORDINATES_COLUMN)
    parser.add_argument('--coordinates-order', default=config.COORDINATES_ORDER, choices=['latlon', 'lonlat'])
    parser.add_argument('--id-column', default=None)
    parser.add_argument('--width', type=_positive_float, default=config.WIDTH)
    parser.add_argument('--height', type=_positive_float, default=config.HEIGHT)
    parser.add_argument('--max-radius', type=float, default=config.MAX_RADIUS)
    parser.add_argument('--graticule-step', type=_positive_float, default=config.GRATICULE_STEP)
    parser.add_argument('--output-dir', type=Path, default=config.OUTPUT_DIR)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    snapshots = load_snapshots(args)
    ops = render(
        snapshots['land'],
        snapshots['borders'],
        snapshots['records'],
        width=args.width,
        height=args.height,
        max_radius=args.max_radius,
        graticule_step=args.graticule_step,
    )
    args.output_dir.mkdir(parents=True, exist_ok=True)
    _write_svg(ops, args.output_dir, args.width, args.height)
    _write_draw_ops(ops, args.output_dir)


if __name__ == '__main__':
    main()
