#!/usr/bin/env python3
"""Fetch the world topology and incident table once and store normalized local copies."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pandas as pd

from . import config
from .errors import TopologyError
from .incidents import read_incident_frame, records_from_frame
from .topology import read_topology

DatasetConfig = Dict[str, object]

TOPOLOGY_FILE = config.PROCESSED_TOPOLOGY_FILE
INCIDENTS_FILE = config.PROCESSED_INCIDENTS_FILE


def build_topology(
    source: str = config.TOPOLOGY_SOURCE,
    output: Path = TOPOLOGY_FILE,
    force_rebuild: bool = False,
) -> Path:
    if output.exists() and not force_rebuild:
        return output
    topology = read_topology(source)
    for name in (config.LAND_OBJECT, config.BORDER_OBJECT):
        if name not in topology.get('objects', {}):
            raise TopologyError(f"Topology missing object '{name}'")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(topology), encoding='utf-8')
    print(f"✔️  Wrote {config.display_path(output)}")
    return output


def build_incidents_df(
    source: str = config.INCIDENTS_SOURCE,
    max_records: Optional[int] = None,
    store_processed: bool = True,
    force_rebuild: bool = False,
) -> pd.DataFrame:
    """Incidents with explicit longitude/latitude columns and a numeric magnitude."""
    if INCIDENTS_FILE.exists() and not force_rebuild and max_records is None:
        return pd.read_csv(INCIDENTS_FILE)
    raw = read_incident_frame(source)
    if max_records:
        raw = raw.head(max_records)
    records = records_from_frame(raw)
    df = pd.DataFrame(
        [
            {
                'incident_id': record.identity,
                'longitude': record.longitude,
                'latitude': record.latitude,
                config.MAGNITUDE_COLUMN: record.magnitude,
            }
            for record in records
        ],
        columns=['incident_id', 'longitude', 'latitude', config.MAGNITUDE_COLUMN],
    )
    if store_processed:
        INCIDENTS_FILE.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(INCIDENTS_FILE, index=False)
        print(f"✔️  Wrote {config.display_path(INCIDENTS_FILE)}")
    return df


DATASETS: Dict[str, DatasetConfig] = {
    'world_topology': {
        'builder': build_topology,
    },
    'incidents': {
        'builder': build_incidents_df,
    },
}


def build_dataset(key: str, force_rebuild: bool = False) -> None:
    dataset = DATASETS[key]
    builder: Callable[..., object] = dataset['builder']  # type: ignore[assignment]
    builder(force_rebuild=force_rebuild)


def main() -> None:
    parser = argparse.ArgumentParser(description='Fetch and normalize the map datasets.')
    parser.add_argument('dataset', nargs='*', help='Optional dataset keys (default: all)')
    parser.add_argument('--force', action='store_true', help='Rebuild even when a processed copy exists')
    args = parser.parse_args()

    keys = args.dataset or list(DATASETS.keys())
    for key in keys:
        if key not in DATASETS:
            print(f"Unknown dataset '{key}'. Available: {', '.join(DATASETS)}", file=sys.stderr)
            continue
        build_dataset(key, force_rebuild=args.force)


if __name__ == '__main__':
    main()
